#!/usr/bin/env python3
"""
xmltv2vdr - XMLTV to VDR EPG converter

Reads the lookup tables, converts the whole XMLTV file, then pushes the
EPG records of every channel to VDR in one SVDRP session.
"""

import logging
import sys
import time
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import List, Optional

from .args import ArgumentParser
from .config import ConfigManager
from .converter import XmltvConverter
from .svdrp import SimulatedTransport, SocketTransport, SvdrpClient, SvdrpError
from .tables import LookupFileError, LookupTables

# Package version
from . import __version__

LOG_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


def setup_logging(logging_config: dict, log_file: Path):
    """Setup console logging and, in debug mode, the debug log file"""
    console_level = LOG_LEVELS.get(logging_config["level"], logging.WARNING)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()

    # Console goes to stderr, stdout is reserved for simulation output
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(console_level)
    console_handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    root_logger.addHandler(console_handler)

    if logging_config["file"]:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, mode="w", encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s %(levelname)-8s %(message)s", datefmt="%Y/%m/%d %H:%M:%S"
            )
        )
        root_logger.addHandler(file_handler)
        root_logger.setLevel(logging.DEBUG)
    else:
        root_logger.setLevel(console_level)


def create_transport(config: dict):
    """Live SVDRP connection, or stdout in simulation mode"""
    if config.get("simulate", False):
        return SimulatedTransport(sys.stdout.buffer)
    return SocketTransport(config.get("host", "localhost"), config.get("port", 6419))


def main(argv: Optional[List[str]] = None):
    """Main application entry point"""
    python_start_time = time.time()

    try:
        # Parse command line arguments
        arg_parser = ArgumentParser()
        args = arg_parser.parse_args(argv)

        defaults = arg_parser.get_system_defaults(args.workdir)
        config_file = args.config_file or defaults["config_file"]
        log_file = args.debug_file or defaults["log_file"]

        # Setup logging
        logging_config = arg_parser.get_logging_config(args)
        setup_logging(logging_config, log_file)

        # Load and validate configuration
        config_manager = ConfigManager(config_file, workdir=defaults["base_dir"])
        config = config_manager.load_config(arg_parser.get_setting_overrides(args))

        xmltv_file = config_manager.resolve_path("xmltv")
        channels_file = config_manager.resolve_path("channels")
        if not channels_file:
            arg_parser.error("Need to specify a channels.conf file")
        if not xmltv_file:
            arg_parser.error("Need to specify an XMLTV file")

        # Start session logging
        logging.info("=" * 60)
        logging.info("xmltv2vdr session started - Version %s", __version__)
        if logging_config["file"]:
            logging.info("Debug log: %s", log_file)
        config_manager.log_config_summary()

        # Lookup tables, any problem is fatal before parsing starts
        try:
            tables = LookupTables.load(
                channels_file,
                config_manager.resolve_path("genres"),
                config_manager.resolve_path("ratings"),
            )
        except LookupFileError as e:
            logging.error("%s", e)
            return 1

        # Convert the whole XMLTV file before talking to VDR
        converter = XmltvConverter(tables, config)
        try:
            store = converter.convert(xmltv_file)
        except (OSError, ET.ParseError) as e:
            logging.error("Cannot parse %s: %s", xmltv_file, e)
            return 1

        # Push to VDR
        try:
            with SvdrpClient(create_transport(config), timeout=config["timeout"]) as client:
                channels_sent = client.push(store, tables.channels)
        except SvdrpError as e:
            logging.error("SVDRP session failed: %s", e)
            logging.info("xmltv2vdr session ended with error")
            return 1

        stats = converter.get_statistics()
        logging.info("=" * 60)
        logging.info("SUMMARY:")
        logging.info("  Total execution time: %.2f seconds", time.time() - python_start_time)
        logging.info("  Programmes converted: %d", stats.get("stored", 0))
        logging.info("  Channels sent: %d", channels_sent)
        logging.info("All done.")
        logging.info("=" * 60)
        return 0

    except KeyboardInterrupt:
        logging.info("Interrupted by user")
        return 1
    except Exception as e:
        logging.exception("Critical error: %s", str(e))
        logging.info("xmltv2vdr session ended with error")
        return 1


if __name__ == "__main__":
    sys.exit(main())
