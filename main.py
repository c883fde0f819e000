#!/usr/bin/env python
"""
Release Signing Config - Main Entry Point
Loads android/key.properties and resolves the release signing credentials.
"""
import sys
import argparse
import traceback

from modules.config_manager import ConfigurationManager
from modules.logging_config import LoggingConfigurator
from modules.properties_loader import PropertiesLoader
from modules.signing_resolver import SigningConfigResolver, SigningResolution
from utils.exceptions import SigningConfigException
from utils import constants


def parse_arguments(argv=None):
    """
    Parse command-line arguments.

    Returns:
        argparse.Namespace: Parsed command-line arguments.
    """
    parser = argparse.ArgumentParser(
        description="Resolve release signing credentials from a key.properties file",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )

    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Optional path to a JSON settings file"
    )

    parser.add_argument(
        "--properties",
        type=str,
        default=None,
        help="Path to the signing properties file (overrides signing.properties_file)"
    )

    parser.add_argument(
        "--build-type",
        choices=constants.BUILD_TYPES,
        default=None,
        help="Build variant; signing is only required for release builds"
    )

    parser.add_argument(
        "--base-dir",
        type=str,
        default=None,
        help="Directory a relative storeFile is resolved against (overrides signing.base_dir)"
    )

    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose (DEBUG) logging"
    )

    return parser.parse_args(argv)


def apply_overrides(config: dict, args: argparse.Namespace) -> dict:
    """Apply CLI overrides on top of the validated settings."""
    signing = config['signing']
    if args.properties:
        signing['properties_file'] = args.properties
    if args.build_type:
        signing['build_type'] = args.build_type
    if args.base_dir:
        signing['base_dir'] = args.base_dir
    if args.verbose:
        config['logging']['level'] = 'DEBUG'
    return config


def main(argv=None):
    """
    Load settings, set up logging, then load and resolve signing credentials.

    Returns:
        int: Exit code (0 for success, 1 for errors, 130 when interrupted)
    """
    logger = None

    try:
        args = parse_arguments(argv)

        config_manager = ConfigurationManager(config_path=args.config)
        config = apply_overrides(config_manager.load_and_validate(), args)

        logging_configurator = LoggingConfigurator(config)
        logging_configurator.setup()
        logger = logging_configurator.get_logger('signing')

        signing = config['signing']
        properties_path = signing['properties_file']

        loader = PropertiesLoader(encoding=signing['encoding'])
        config_map = loader.load(properties_path)

        if signing['build_type'] != constants.BUILD_TYPE_RELEASE:
            logger.info(f"{signing['build_type']} build: release signing not required")
            print(f"\n[SUCCESS] {signing['build_type']} build, no signing config needed.")
            return 0

        resolver = SigningConfigResolver(properties_path=properties_path)
        credentials = SigningResolution(config_map, resolver).resolve()
        keystore = credentials.keystore_path(signing['base_dir'])

        if not keystore.exists():
            logger.warning(f"Keystore file does not exist yet: {keystore}")

        print("\n[SUCCESS] Release signing config resolved.")
        print(f"  storeFile: {credentials.store_file}")
        print(f"  keystore:  {keystore.absolute()}")
        print(f"  keyAlias:  {credentials.key_alias}")
        return 0

    except SigningConfigException as e:
        msg = f"Signing Config Error: {str(e)}"
        print(f"\n[ERROR] {msg}", file=sys.stderr)
        if logger:
            logger.debug(msg, exc_info=True)
        return 1

    except KeyboardInterrupt:
        print("\n[INTERRUPTED] Interrupted by user.", file=sys.stderr)
        if logger:
            logger.warning("Interrupted by user (Ctrl+C)")
        return 130

    except Exception as e:
        msg = f"Unexpected Error: {str(e)}"
        print(f"\n[CRITICAL] {msg}", file=sys.stderr)
        if logger:
            logger.critical(msg, exc_info=True)
        else:
            traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
