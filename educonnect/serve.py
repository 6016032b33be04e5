"""Run the EduConnect API with uvicorn.

Usage:
    python -m educonnect.serve
"""
import uvicorn

from educonnect.core import config


def main() -> None:
    uvicorn.run(
        "educonnect.main:app",
        host="0.0.0.0",
        port=config.PORT,
        reload=not config.IS_PRODUCTION,
    )


if __name__ == "__main__":
    main()
