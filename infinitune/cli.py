# infinitune/cli.py
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

import orjson
from pydantic import ValidationError

from infinitune.core.config import settings
from infinitune.core.errors import UnknownLocaleError
from infinitune.services.identity import available_locales
from infinitune.services.songs import generate

logger = logging.getLogger("Infinitune")


def _dumps(obj) -> bytes:
    return orjson.dumps(obj, option=orjson.OPT_INDENT_2)


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="infinitune",
        description="Generate a deterministic page of synthetic songs as JSON.",
    )
    ap.add_argument("--seed", default=settings.default_seed)
    ap.add_argument("--locale", default=settings.default_locale, help="One of: " + ", ".join(available_locales()))
    ap.add_argument("--page", type=int, default=1)
    ap.add_argument("--limit", type=int, default=settings.default_limit)
    ap.add_argument("--likes", type=float, default=0.0, help="Average likes per song")
    ap.add_argument("--out", type=Path, default=None, help="Write JSON here instead of stdout")
    ap.add_argument("-v", "--verbose", action="store_true")
    return ap


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else settings.log_level.upper(),
        format="%(asctime)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    try:
        result = generate(args.seed, args.locale, args.page, args.limit, args.likes)
    except UnknownLocaleError as e:
        logger.error(str(e))
        return 2
    except ValidationError as e:
        logger.error("Invalid parameters: " + "; ".join(err["msg"] for err in e.errors()))
        return 2

    body = _dumps(result.model_dump(mode="json"))

    if args.out is None:
        sys.stdout.buffer.write(body + b"\n")
        return 0

    args.out.parent.mkdir(parents=True, exist_ok=True)
    args.out.write_bytes(body + b"\n")
    logger.info(f"💾 Saved {len(result.songs)} songs to {args.out}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
