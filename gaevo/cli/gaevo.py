import sys
import argparse


def clean_command(args):
    import os
    import shutil

    def prompt_confirm():
        warning = (
            "WARNING: This will permanently delete the following:\n"
            "- logs/\n- all __pycache__ directories\n\nContinue? [Y/n]: "
        )
        return input(warning).strip() == 'Y'

    if args.yes or prompt_confirm():
        if os.path.isdir("logs"):
            print("Removing logs/ ...")
            shutil.rmtree("logs", ignore_errors=True)

        for root, dirs, files in os.walk("."):
            for d in dirs:
                if d == "__pycache__":
                    pycache_path = os.path.join(root, d)
                    print(f"Removing {pycache_path} ...")
                    shutil.rmtree(pycache_path, ignore_errors=True)
        print("Clean complete.")
    else:
        print("Clean Aborted.")
        sys.exit(1)


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="gaevo unified CLI: run, clean"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    # Run subcommand; its options (and --help) belong to the run parser in tsp.py
    subparsers.add_parser(
        "run", add_help=False, help="Evolve a TSP tour (see `gaevo run --help`)"
    )

    # Clean subcommand
    clean_parser = subparsers.add_parser("clean", help="Remove generated files (logs, pycaches)")
    clean_parser.add_argument('--yes', '-y', action='store_true', help='Do not ask for confirmation')

    args, rest = parser.parse_known_args(argv)

    if args.command == "run":
        from .tsp import tsp_command
        tsp_command(rest)
    elif args.command == "clean":
        if rest:
            parser.error(f"unrecognized arguments: {' '.join(rest)}")
        clean_command(args)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
