"""ASGI entrypoint: ``uvicorn envprobe.main:app``."""

import uvicorn

from envprobe import create_app
from envprobe.core.config import settings

app = create_app()


def run() -> None:
    uvicorn.run("envprobe.main:app", host="0.0.0.0", port=settings.port, reload=False)


if __name__ == "__main__":
    run()
