import argparse
import logging
import sys

from scenecast.broadcaster import cli_utils
from scenecast.broadcaster.client import Client
from scenecast.broadcaster.common import PropertyName, decode_property
from scenecast.errors import ChannelError, StructuralError
from scenecast.scene import transforms

logger = logging.getLogger() if __name__ == "__main__" else logging.getLogger(__name__)


def parse_property_value(name: str, values):
    """Turn command line strings into the value expected for the property name"""
    if name == PropertyName.VISIBLE.value:
        if len(values) != 1 or values[0].lower() not in ("true", "false", "1", "0"):
            raise argparse.ArgumentTypeError(f"Property {name} expects true or false")
        return values[0].lower() in ("true", "1")
    try:
        numbers = [float(v) for v in values]
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"Property {name} expects numbers, got {' '.join(values)}") from e
    if len(numbers) == 1:
        return numbers[0]
    return numbers


def process_delete_command(client: Client, args):
    for path in args.path:
        client.delete(path)


def process_transform_command(client: Client, args):
    client.set_transform(args.path, transforms.isometry(args.xyz, args.rpy))


def process_property_command(client: Client, args):
    property_ = decode_property(args.name, parse_property_value(args.name, args.value))
    client.set_property(args.path, property_)


def main():
    args, args_parser = parse_cli_args()
    cli_utils.init_logging(args)

    if not hasattr(args, "func"):
        args_parser.print_help()
        return 1

    try:
        with Client(args.endpoint, args.timeout) as client:
            args.func(client, args)
    except (StructuralError, argparse.ArgumentTypeError) as e:
        logger.error(e)
        return 2
    except ChannelError as e:
        logger.error(e, exc_info=True)
        return 3
    return 0


def parse_cli_args():
    parser = argparse.ArgumentParser(prog="scenecast", description="Send commands to a scene viewer")
    cli_utils.add_logging_cli_args(parser)
    cli_utils.add_connection_cli_args(parser)

    sub_parsers = parser.add_subparsers()

    delete_parser = sub_parsers.add_parser("delete", help="Delete scene nodes and their children")
    delete_parser.add_argument("path", help="Scene paths, separated by spaces.", nargs="+")
    delete_parser.set_defaults(func=process_delete_command)

    transform_parser = sub_parsers.add_parser("transform", help="Set the transform of a scene node")
    transform_parser.add_argument("path")
    transform_parser.add_argument("--xyz", type=float, nargs=3, default=(0.0, 0.0, 0.0), help="Translation")
    transform_parser.add_argument(
        "--rpy", type=float, nargs=3, default=(0.0, 0.0, 0.0), help="Roll, pitch and yaw in radians"
    )
    transform_parser.set_defaults(func=process_transform_command)

    property_parser = sub_parsers.add_parser("property", help="Set a property of a scene node")
    property_parser.add_argument("path")
    property_parser.add_argument("name", choices=[p.value for p in PropertyName])
    property_parser.add_argument("value", nargs="+", help="true/false, a number or the vector components.")
    property_parser.set_defaults(func=process_property_command)

    return parser.parse_args(), parser


if __name__ == "__main__":
    sys.exit(main())
