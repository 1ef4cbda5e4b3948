#!/usr/bin/env python3
"""
Run a grammar check over a JSON request file without starting the API.

The input file has the same shape as the HTTP request body:
    {"textLayers": [{"id": "a", "name": "Title", "text": "Ths is a tst."}],
     "batchConfig": {"concurrency": 4, "delay": 200}}
"""

import argparse
import asyncio
import json
import sys
from pathlib import Path

from layerproof import LayerProof, fragments_from_payload
from layerproof.config import load_settings, load_settings_file
from layerproof.exceptions import InvalidRequestError
from layerproof.utils import setup_logging


def main() -> None:
    parser = argparse.ArgumentParser(description="Check text layers from a JSON request file.")
    parser.add_argument("input", help="Path to request JSON ({textLayers, batchConfig?})")
    parser.add_argument("--concurrency", type=int, default=None, help="Layers checked per group")
    parser.add_argument("--delay", type=int, default=None, help="Pause between groups (ms)")
    parser.add_argument("--config", default=None, help="Optional settings YAML")
    parser.add_argument("--output", default=None, help="Write the response JSON here instead of stdout")
    args = parser.parse_args()

    settings = load_settings_file(args.config) if args.config else load_settings()
    setup_logging(settings.log_level)

    try:
        payload = json.loads(Path(args.input).read_text())
        fragments, batch_config = fragments_from_payload(payload)
    except (json.JSONDecodeError, InvalidRequestError) as e:
        print(f"Invalid request file {args.input}: {e}", file=sys.stderr)
        sys.exit(2)

    checker = LayerProof(settings=settings)
    config = checker.batch_config(
        concurrency=args.concurrency if args.concurrency is not None else batch_config.get("concurrency"),
        delay=args.delay if args.delay is not None else batch_config.get("delay"),
    )
    outcome = asyncio.run(checker.check(fragments, config))

    response = json.dumps(outcome.to_response(), indent=2)
    if args.output:
        Path(args.output).write_text(response)
        print(
            f"Checked {outcome.stats.processed_layers}/{outcome.stats.total_layers} layers, "
            f"{outcome.stats.total_issues} issues -> {args.output}"
        )
    else:
        print(response)


if __name__ == "__main__":
    main()
