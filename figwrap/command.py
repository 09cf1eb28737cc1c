# main interface for using figwrap
# figwrap init - writes figwrap.json
# figwrap build SOURCE [-o OUTPUT]
# figwrap config - prints the effective options

import argparse
import json
import logging
import os
import os.path
import sys

from . import files
from . import figureconfig
from .errors import CommandError, CompileError, ConfigError


def init(args):
    config_file = os.path.join(os.getcwd(), figureconfig.CONFIG_FILE_NAME)

    if (os.path.exists(config_file)):
        raise CommandError("Config file already exists: " + config_file)

    with open(config_file, "w", encoding="utf-8") as f:
        json.dump(figureconfig.FigureConfig().to_dict(), f, indent=2)
        f.write("\n")

    print("OK - edit " + figureconfig.CONFIG_FILE_NAME)


def load(args):
    overrides = {"figure_class_name": args.figure_class,
                 "image_class_name": args.image_class,
                 "caption_class_name": args.caption_class,
                 "allow_empty_caption": args.allow_empty_caption}
    return figureconfig.load_config(args.config, overrides=overrides)


def build(args):
    if args.source is None:
        raise CommandError("build needs a source file or directory")
    if not os.path.exists(args.source):
        raise CommandError("No such file or directory: " + args.source)

    config = load(args)
    raw_html = not args.no_raw_html

    if os.path.isdir(args.source):
        if args.output is None:
            raise CommandError("Building a directory needs --output")
        files.build_dir(args.source, args.output, config, raw_html=raw_html, force=args.force)
        return

    html_text = files.build_file(args.source, args.output, config, raw_html=raw_html)
    if args.output is None:
        sys.stdout.write(html_text)
        if not html_text.endswith("\n"):
            sys.stdout.write("\n")


def show_config(args):
    print(json.dumps(load(args).to_dict(), indent=2))


COMMANDS = {"init": init,
            "build": build,
            "config": show_config}


def make_parser():
    parser = argparse.ArgumentParser(prog="figwrap",
                                     description="Wrap images in <figure> elements with captions")
    parser.add_argument("command", choices=sorted(COMMANDS))
    parser.add_argument("source", nargs="?", help="Markdown/HTML file or directory")
    parser.add_argument("-o", "--output", help="Output file or directory")
    parser.add_argument("-c", "--config", help="JSON config file (default ./" + figureconfig.CONFIG_FILE_NAME + ")")
    parser.add_argument("--figure-class", help="Class added to <figure>")
    parser.add_argument("--image-class", help="Class added to <img>")
    parser.add_argument("--caption-class", help="Class added to <figcaption>")
    parser.add_argument("--allow-empty-caption", action="store_true", default=None,
                        help="Wrap images without alt text too")
    parser.add_argument("--no-raw-html", action="store_true",
                        help="Only wrap images written in markdown syntax")
    parser.add_argument("--force", action="store_true", help="Rebuild every file")
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser


def main(argv=None):
    args = make_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format="%(levelname)s %(name)s: %(message)s")

    try:
        COMMANDS[args.command](args)
    except (ConfigError, CompileError) as err:
        print("Error: " + err.message + " (" + err.file_name + ")", file=sys.stderr)
        return 1
    except CommandError as err:
        print("Error: " + err.message, file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
