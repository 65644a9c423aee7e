import os
import sys
import json
import logging
import argparse
import asyncio

# Required: Use uvloop for better performance
import uvloop
asyncio.set_event_loop_policy(uvloop.EventLoopPolicy())

# Add the current directory to Python path for imports
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from configuration import (
    DEFAULT_NUM_KEYS, DEFAULT_OBJ_LENGTH, AUTO_HEAL_TIMEOUT_SECONDS,
    LOG_LEVEL, LOG_FORMAT
)

# Set up logging (only if not already configured)
if not logging.root.handlers:
    logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT)
logger = logging.getLogger(__name__)

OPS_REQUEST_TYPES = ['head_object', 'get_object', 'list_objects_v2', 'list_buckets',
                     'head_bucket', 'put_object', 'delete_object']
PERF_REQUEST_TYPES = ['list_objects_v2', 'put_object', 'delete_object', 'get_object',
                      'get_object_ttfb', 'get_object_passthrough',
                      'get_object_passthrough_ttfb', 'all']


def build_event(args) -> dict:
    """Build the handler event from parsed arguments, leaving out unset options."""
    fields = {
        'requestType': getattr(args, 'request_type', None),
        'sdkType': getattr(args, 'sdk_type', None),
        'bucket': getattr(args, 'bucket', None),
        'key': getattr(args, 'key', None),
        'value': getattr(args, 'value', None),
        'numKeys': getattr(args, 'num_keys', None),
        'objLength': getattr(args, 'obj_length', None),
        'bucketClean': getattr(args, 'bucket_clean', None),
        'timeoutSeconds': getattr(args, 'timeout_seconds', None),
        'maxAttempts': getattr(args, 'max_attempts', None),
    }
    return {name: str(value) for name, value in fields.items() if value is not None}


class BoltBenchCLI:
    """Runs the Lambda handlers locally."""

    def __init__(self):
        self.parser = self._create_parser()

    def _create_parser(self):
        """Create the main argument parser."""
        parser = argparse.ArgumentParser(
            description='Bolt S3 Lambda benchmarks CLI',
            formatter_class=argparse.RawDescriptionHelpFormatter,
            epilog="""
Examples:
  # Get an object's MD5 through Bolt
  python cli.py ops --request-type get_object --sdk-type bolt --bucket my-bucket --key data.csv

  # Compare put latency of Bolt and S3 with 100 objects of 1KB
  python cli.py perf --request-type put_object --bucket my-bucket --num-keys 100 --obj-length 1024

  # Compare MD5s of an object in Bolt and S3
  python cli.py validate --bucket my-bucket --key data.csv.gz

  # Time until Bolt serves an object again, giving up after 5 minutes
  python cli.py auto-heal --bucket my-bucket --key data.csv --timeout-seconds 300
            """
        )

        subparsers = parser.add_subparsers(dest='command', help='Available commands')

        # Ops command
        ops_parser = subparsers.add_parser('ops', help='Single object/bucket operation')
        ops_parser.add_argument('--request-type', choices=OPS_REQUEST_TYPES, required=True,
                                help='Operation to perform')
        ops_parser.add_argument('--sdk-type', choices=['bolt', 's3'], default='s3',
                                help='Backend to send the request to (default: s3)')
        ops_parser.add_argument('--bucket', type=str, help='Bucket name')
        ops_parser.add_argument('--key', type=str, help='Key name')
        ops_parser.add_argument('--value', type=str, help='Object data for put_object')

        # Perf command
        perf_parser = subparsers.add_parser('perf', help='Bolt vs S3 performance benchmark')
        perf_parser.add_argument('--request-type', choices=PERF_REQUEST_TYPES, default='all',
                                 help='Benchmark to run (default: all)')
        perf_parser.add_argument('--bucket', type=str, required=True, help='Bucket name')
        perf_parser.add_argument('--num-keys', type=int, default=DEFAULT_NUM_KEYS,
                                 help=f'Number of objects, at most 1000 (default: {DEFAULT_NUM_KEYS})')
        perf_parser.add_argument('--obj-length', type=int, default=DEFAULT_OBJ_LENGTH,
                                 help=f'Length of generated objects (default: {DEFAULT_OBJ_LENGTH})')

        # Validate command
        validate_parser = subparsers.add_parser('validate', help='Compare object MD5s in Bolt and S3')
        validate_parser.add_argument('--bucket', type=str, required=True, help='Bucket name')
        validate_parser.add_argument('--key', type=str, required=True, help='Key name')
        validate_parser.add_argument('--bucket-clean', choices=['on', 'off'], default='off',
                                     help='Source bucket was cleaned after crunch (default: off)')

        # Auto-heal command
        heal_parser = subparsers.add_parser('auto-heal', help='Measure Bolt auto-heal time')
        heal_parser.add_argument('--bucket', type=str, required=True, help='Bucket name')
        heal_parser.add_argument('--key', type=str, required=True, help='Key name')
        heal_parser.add_argument('--timeout-seconds', type=float, default=AUTO_HEAL_TIMEOUT_SECONDS,
                                 help=f'Deadline, 0 to disable (default: {AUTO_HEAL_TIMEOUT_SECONDS})')
        heal_parser.add_argument('--max-attempts', type=int, default=0,
                                 help='Attempt budget, 0 for unlimited (default: 0)')

        # List bucket command
        list_parser = subparsers.add_parser('list-bucket', help='List a bucket via Bolt')
        list_parser.add_argument('--bucket', type=str, required=True, help='Bucket name')

        return parser

    async def run_command(self, args):
        """Run the handler for a parsed command and return its result."""
        event = build_event(args)

        if args.command == 'ops':
            from handlers.ops import BoltS3OpsClient
            return await BoltS3OpsClient().process_event(event)
        elif args.command == 'perf':
            from handlers.perf import BoltS3Perf
            return await BoltS3Perf().process_event(event)
        elif args.command == 'validate':
            from handlers.validate import validate_object
            return await validate_object(event)
        elif args.command == 'auto-heal':
            from handlers.auto_heal import auto_heal
            return await auto_heal(event)
        elif args.command == 'list-bucket':
            from handlers.list_bucket import list_bucket
            return await list_bucket(args.bucket)
        raise ValueError(f"Unknown command: {args.command}")

    def run(self, args=None):
        """Run the CLI with the given arguments."""
        if args is None:
            args = sys.argv[1:]

        parsed_args = self.parser.parse_args(args)

        if not parsed_args.command:
            self.parser.print_help()
            return 1

        try:
            result = asyncio.run(self.run_command(parsed_args))
        except KeyboardInterrupt:
            logger.info("Operation interrupted by user")
            return 1
        except Exception as e:
            logger.error(f"Error in {parsed_args.command}: {e}")
            return 1

        print(json.dumps(result, indent=2))

        if result is False or (isinstance(result, dict) and 'errorMessage' in result):
            return 1
        return 0


def main():
    """Main entry point."""
    cli = BoltBenchCLI()
    sys.exit(cli.run())


if __name__ == '__main__':
    main()
