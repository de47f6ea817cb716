# main.py

from subprocess import run
from sys import executable

from app.configs import settings


def start(cmmd: list[str]) -> None:
    run(cmmd, check=True)


def main() -> None:
    cmmd = [
        executable,
        "-m",
        "uvicorn",
        "app:app",
        "--host",
        settings.HOST,
        "--port",
        str(settings.PORT),
        "--log-level",
        settings.LOG_LEVEL.lower(),
        "--loop",
        "uvloop",
        "--http",
        "httptools",
    ]
    if settings.DEBUG:
        cmmd.append("--reload")
    start(cmmd)


if __name__ == "__main__":
    main()
