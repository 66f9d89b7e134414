import uvicorn

ADDRESS = "0.0.0.0"
PORT = 9999


def main():
    # uvicorn traps SIGINT/SIGTERM and runs the lifespan shutdown, which closes MongoDB.
    uvicorn.run("app.main:app", host=ADDRESS, port=PORT)


if __name__ == "__main__":
    main()
