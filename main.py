from fortune_api.server import run


if __name__ == "__main__":
    run()
