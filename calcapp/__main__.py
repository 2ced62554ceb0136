"""Command line entry point for calcapp.

Usage:
  python -m calcapp                      # interactive shell
  python -m calcapp convert "100 km to miles"
  python -m calcapp convert "km to miles" --previous 50
  python -m calcapp calc "2 * (3 + 4)"
  python -m calcapp serve --port 8000
"""
import argparse
import sys

from calcapp.config import settings
from calcapp.conversion import format_conversion_result, try_conversion
from calcapp.errors import ExpressionError
from calcapp.expression import evaluate_expression
from calcapp.formatting import format_number
from calcapp.logging_config import configure_logging


def main(argv=None):
    parser = argparse.ArgumentParser(prog="calcapp")
    parser.add_argument("--log-level", default=None)
    sub = parser.add_subparsers(dest="cmd")

    sub.add_parser("shell")

    p_convert = sub.add_parser("convert")
    p_convert.add_argument("text")
    p_convert.add_argument("--previous", default=None)

    p_calc = sub.add_parser("calc")
    p_calc.add_argument("expression")

    p_serve = sub.add_parser("serve")
    p_serve.add_argument("--host", default="127.0.0.1")
    p_serve.add_argument("--port", type=int, default=8000)

    args = parser.parse_args(argv)
    configure_logging(args.log_level, settings.system)

    if args.cmd == "convert":
        outcome = try_conversion(args.text, args.previous)
        if not outcome:
            print(f"Invalid conversion: {outcome.message}", file=sys.stderr)
            return 1
        print(format_conversion_result(outcome))
        return 0

    if args.cmd == "calc":
        try:
            print(format_number(evaluate_expression(args.expression)))
        except ExpressionError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1
        return 0

    if args.cmd == "serve":
        import uvicorn
        from calcapp.rpc import create_app

        uvicorn.run(create_app(settings), host=args.host, port=args.port)
        return 0

    from calcapp.shell import main as shell_main

    return shell_main(settings)


if __name__ == "__main__":
    raise SystemExit(main())
