import uvicorn

from boggle.settings import settings


def main():
    uvicorn.run("boggle.server:app", host="0.0.0.0", port=settings.PORT, reload=settings.DEBUG)


if __name__ == "__main__":
    main()
