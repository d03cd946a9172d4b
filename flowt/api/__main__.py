"""Run the FLOWT HTTP service with uvicorn."""

import uvicorn

from flowt.config import configure_logging, settings


def main():
    configure_logging()
    uvicorn.run("flowt.api.app:app", host="0.0.0.0", port=settings.PORT)


if __name__ == "__main__":
    main()
