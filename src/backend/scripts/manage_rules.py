from __future__ import annotations

import argparse
import json
import logging
import sys
from itertools import islice
from pathlib import Path


def _ensure_backend_on_path() -> None:
    backend_dir = Path(__file__).resolve().parents[1]
    if str(backend_dir) not in sys.path:
        sys.path.insert(0, str(backend_dir))


def _non_negative_int(raw: str) -> int:
    value = int(raw)
    if value < 0:
        raise argparse.ArgumentTypeError("must be >= 0")
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Manage filtered stream rules and read the stream."
    )
    parser.add_argument("--verbose", action="store_true", help="Log outgoing requests.")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("list", help="List the current rules.")

    add = sub.add_parser("add", help="Add one or more rules.")
    add.add_argument("values", nargs="+", help="Rule expressions, e.g. 'cat has:images'.")
    add.add_argument("--tag", default=None, help="Tag applied to every rule added.")
    add.add_argument("--dry-run", action="store_true", help="Validate without saving.")

    delete = sub.add_parser("delete", help="Delete rules by id or by value.")
    target = delete.add_mutually_exclusive_group(required=True)
    target.add_argument("--id", dest="ids", action="append", help="Rule id (repeatable).")
    target.add_argument("--value", dest="values", action="append", help="Rule value (repeatable).")
    delete.add_argument("--dry-run", action="store_true", help="Validate without deleting.")

    stream = sub.add_parser("stream", help="Print stream messages as JSON lines.")
    stream.add_argument("--expansion", action="append", default=[])
    stream.add_argument("--media-field", action="append", default=[])
    stream.add_argument("--place-field", action="append", default=[])
    stream.add_argument("--poll-field", action="append", default=[])
    stream.add_argument("--tweet-field", action="append", default=[])
    stream.add_argument("--user-field", action="append", default=[])
    stream.add_argument("--backfill-minutes", type=_non_negative_int, default=0)
    stream.add_argument("--limit", type=_non_negative_int, default=None, help="Stop after this many messages.")
    return parser


def _stream_params(args: argparse.Namespace):
    from common.filtered_stream import StreamQueryParamsBuilder

    builder = StreamQueryParamsBuilder()
    for value in args.expansion:
        builder.add_expansion(value)
    for value in args.media_field:
        builder.add_media_field(value)
    for value in args.place_field:
        builder.add_place_field(value)
    for value in args.poll_field:
        builder.add_poll_field(value)
    for value in args.tweet_field:
        builder.add_tweet_field(value)
    for value in args.user_field:
        builder.add_user_field(value)
    return builder.add_backfill_minutes(args.backfill_minutes)


def run(args: argparse.Namespace, transport) -> int:
    from common.filtered_stream import (
        DeleteRulesRequest,
        FilteredStream,
        RulesClient,
        RulesRequestBuilder,
    )

    if args.command == "stream":
        messages = FilteredStream(transport).messages(_stream_params(args))
        if args.limit is not None:
            messages = islice(messages, args.limit)
        for message in messages:
            print(json.dumps(message))
        return 0

    client = RulesClient(transport)
    if args.command == "list":
        response = client.get_rules()
    elif args.command == "add":
        builder = RulesRequestBuilder()
        for value in args.values:
            builder.add_rule(value, args.tag)
        response = client.create(builder.build(), args.dry_run)
    else:
        if args.ids:
            request = DeleteRulesRequest.by_ids(*args.ids)
        else:
            request = DeleteRulesRequest.by_values(*args.values)
        response = client.delete(request, args.dry_run)

    print(json.dumps(response.model_dump(by_alias=True, mode="json"), indent=2))
    return 0


def main(argv: list[str] | None = None, transport=None) -> int:
    _ensure_backend_on_path()
    from common.filtered_stream import FilteredStreamError
    from connectors.twitter import TwitterHttpClient, get_twitter_config

    args = build_parser().parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG)

    if transport is None:
        try:
            transport = TwitterHttpClient(get_twitter_config())
        except ValueError as exc:
            raise SystemExit(str(exc)) from exc

    try:
        return run(args, transport)
    except FilteredStreamError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
