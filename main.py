"""
main.py: reservation API entry point.

    python main.py

Docs are served at http://127.0.0.1:8000/docs. The dashboard runs separately:

    streamlit run dashboard/app.py
"""

from __future__ import annotations

import uvicorn

from backend.utils.config import get_settings


HOST = "127.0.0.1"
PORT = 8000


def main() -> None:
    settings = get_settings()
    # one process, no reloader: the inventory lives in this process only
    uvicorn.run(
        "app:app",
        host=HOST,
        port=PORT,
        workers=1,
        reload=False,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
