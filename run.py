import argparse
import logging

import uvicorn

from cueroom.core.config import settings

logger = logging.getLogger("cueroom")

def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Serve the TheCueRoom API and its /ws hub")
    parser.add_argument("--host", default="0.0.0.0", help="Interface to bind (default: 0.0.0.0)")
    parser.add_argument("--port", type=int, default=8000, help="Port to bind (default: 8000)")
    parser.add_argument("--reload", action="store_true", help="Reload on code changes (always on with DEBUG)")
    parser.add_argument("--log-level", default="debug" if settings.DEBUG else "info", help="Uvicorn log level")
    return parser.parse_args()

def main():
    args = parse_args()
    reload = args.reload or settings.DEBUG

    # The comment hub lives in process memory, so the server runs a single worker
    logger.info(f"TheCueRoom API ({settings.ENVIRONMENT}) on http://{args.host}:{args.port}, ws at /ws")
    uvicorn.run(
        "cueroom.main:app",
        host=args.host,
        port=args.port,
        reload=reload,
        workers=1,
        log_level=args.log_level,
    )

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    main()
