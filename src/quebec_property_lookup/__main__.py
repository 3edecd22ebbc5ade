import argparse
import json
import logging
import sys
from pathlib import Path

from .projector import project
from .selection import PropertySelection
from .settings import get_settings


def _load(source):
    if source == "-":
        return json.load(sys.stdin)
    return json.loads(Path(source).read_text(encoding="utf-8"))


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Project assessment roll records into display fields",
    )
    parser.add_argument(
        "record",
        help="JSON file holding one record or a list of records ('-' for stdin)",
    )
    parser.add_argument(
        "--municipality",
        default=None,
        help="Municipality selected for the search (used in the address)",
    )
    parser.add_argument(
        "--selection",
        action="store_true",
        help="Print only the hand-off subset (id, address, owner, value, ...)",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level (DEBUG, INFO, etc.)",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=(args.log_level or get_settings().log_level).upper(),
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    payload = _load(args.record)
    records = payload if isinstance(payload, list) else [payload]

    out = []
    for record in records:
        prop = project(record, args.municipality)
        if args.selection:
            out.append(PropertySelection.from_property(prop).model_dump(by_alias=True))
        else:
            out.append(prop.to_dict())

    result = out if isinstance(payload, list) else out[0]
    print(json.dumps(result, ensure_ascii=False, indent=2))


def _safe_main():
    try:
        main()
    except SystemExit:
        raise
    except Exception as exc:
        print(json.dumps({"error": str(exc)}))
        raise SystemExit(1)


if __name__ == "__main__":
    _safe_main()
