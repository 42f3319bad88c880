"""
Shell AI entrypoint.

    shell-ai            read {"prompt", "mode"} JSON from stdin, print the result
    shell-ai serve      run the HTTP API
    shell-ai init-db    create the history table in DATABASE_URL
"""

import argparse
import asyncio
import json
import logging
import sys

FALLBACK_OUTPUT = "# Error processing request"


async def _translate_once(prompt: str, mode: str) -> str:
    from .llm.manager import LLMManager
    from .translator import TranslationService

    manager = LLMManager()
    await manager.initialize()
    try:
        result = await TranslationService(manager).translate(prompt, mode)
        return result.text
    finally:
        await manager.cleanup()


def run_stdin() -> int:
    """Read stdin, translate, print the command or explanation."""
    try:
        raw = sys.stdin.read().strip()
        if not raw:
            return 1

        data = json.loads(raw)
        prompt = data.get("prompt", "")
        mode = data.get("mode") or "generate"

        if not prompt:
            return 1

        print(asyncio.run(_translate_once(prompt, mode)), end="")
        return 0

    except KeyboardInterrupt:
        return 1
    except Exception as e:
        logging.getLogger(__name__).debug(f"stdin translate failed: {e}")
        print(FALLBACK_OUTPUT, end="")
        return 1


def serve(host: str, port: int):
    import uvicorn
    from .server import create_app

    uvicorn.run(create_app(), host=host, port=port)


def init_db() -> int:
    from .history import SqlHistoryStore
    from .llm import config

    if not config.DATABASE_URL:
        print("shell-ai: DATABASE_URL not set", file=sys.stderr)
        return 1
    store = SqlHistoryStore.from_url(config.DATABASE_URL)
    store.create_schema()
    store.dispose()
    return 0


def main(argv=None):
    from .llm import config
    from . import config_file

    parser = argparse.ArgumentParser(prog="shell-ai")
    sub = parser.add_subparsers(dest="command")
    serve_parser = sub.add_parser("serve", help="run the HTTP API")
    serve_parser.add_argument("--host", default=config.HOST)
    serve_parser.add_argument("--port", type=int, default=config.PORT)
    sub.add_parser("init-db", help="create the history table")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if config_file.get("debug") else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "serve":
        serve(args.host, args.port)
        sys.exit(0)
    if args.command == "init-db":
        sys.exit(init_db())
    sys.exit(run_stdin())


if __name__ == "__main__":
    main()
