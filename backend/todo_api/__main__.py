"""
Run the Todo API with uvicorn: `python -m todo_api`.

Host and port come from HOST / PORT (see config.Settings).
"""

import uvicorn

from todo_api.config import settings


def main() -> None:
    uvicorn.run(
        "todo_api.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
