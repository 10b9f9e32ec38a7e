"""
Main argument parser module for xmltv2vdr

Orchestrates argument parsing and validation, and maps the command line
onto configuration settings.
"""

import argparse
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from .validator import ArgumentValidator
from .path_manager import PathManager


class ArgumentParser:
    """Command line argument parser for xmltv2vdr"""

    # argument name -> configuration setting
    SETTING_ARGUMENTS = {
        "adjust": "adjust",
        "channels": "channels",
        "dest": "host",
        "genres": "genres",
        "desclen": "desclen",
        "credits": "credits",
        "port": "port",
        "priority": "priority",
        "ratings": "ratings",
        "timeout": "timeout",
        "xmltv": "xmltv",
        "lang": "lang",
        "workdir": "workdir",
    }

    def __init__(self):
        self.parser = self._create_parser()
        self.validator = ArgumentValidator()
        self.path_manager = PathManager()
        self.args: Optional[argparse.Namespace] = None

    def _create_parser(self):
        """Create the argument parser with all options"""
        parser = argparse.ArgumentParser(
            prog="xmltv2vdr",
            description="Converts XMLTV data into VDR EPG and sends it over SVDRP",
            formatter_class=argparse.RawDescriptionHelpFormatter,
            epilog=self._get_epilog_text(),
        )

        parser.add_argument(
            "--version", action="store_true",
            help="Show version and exit"
        )

        # Input files
        parser.add_argument(
            "-x", "--xmltv", type=str, metavar="FILE",
            help="File containing xmltv data"
        )

        parser.add_argument(
            "-c", "--channels", type=str, metavar="FILE",
            help="File containing modified channels.conf info"
        )

        parser.add_argument(
            "-g", "--genres", type=str, metavar="FILE",
            help="Genre table, adds genre information when the xmltv data has categories"
        )

        parser.add_argument(
            "-r", "--ratings", type=str, metavar="FILE",
            help="Rating table, adds ratings information when the xmltv data has ratings"
        )

        # EPG content
        parser.add_argument(
            "-a", "--adjust", type=int, metavar="MINS",
            help="Adjust the xmltv times fed into VDR, in minutes (default: 0)"
        )

        parser.add_argument(
            "-l", "--desclen", type=int, metavar="LENGTH",
            help="Length of the EPG description in characters (0: all, default: 0)"
        )

        parser.add_argument(
            "-L", "--credits", type=int, metavar="COUNT",
            help="Number of EPG credits to keep (0: all, default: 0)"
        )

        parser.add_argument(
            "-P", "--priority", type=int,
            help="EPG priority, if multiple sources (default: 0)"
        )

        parser.add_argument(
            "--lang", type=str, metavar="TAG",
            help="Preferred language of titles and descriptions (default: en)"
        )

        parser.add_argument(
            "-X", "--extras", action="store_true",
            help="Add extra attributes to the description (episode-num system, star-rating)"
        )

        # SVDRP
        parser.add_argument(
            "-d", "--dest", type=str, metavar="HOSTNAME",
            help="Destination hostname (default: localhost)"
        )

        parser.add_argument(
            "-p", "--port", type=int,
            help="SVDRP port number (default: 6419)"
        )

        parser.add_argument(
            "-t", "--timeout", type=int, metavar="SECONDS",
            help="Time allowed to give all info to VDR (default: 60)"
        )

        parser.add_argument(
            "-s", "--simulate", action="store_true",
            help="Simulation mode, print SVDRP commands to stdout"
        )

        # Log level selection
        level_group = parser.add_mutually_exclusive_group()
        level_group.add_argument(
            "-q", "--quiet", action="store_true",
            help="Quiet mode, no warnings"
        )

        level_group.add_argument(
            "-v", "--verbose", action="store_true",
            help="Show info messages"
        )

        parser.add_argument(
            "-D", "--debug", action="store_true",
            help="Write debug log"
        )

        parser.add_argument(
            "--debug-file", type=Path, metavar="FILE",
            help="Debug log file (default: <workdir>/log/debug.log)"
        )

        # Configuration
        parser.add_argument(
            "--config-file", type=Path,
            help="Configuration file path"
        )

        parser.add_argument(
            "--workdir", type=str,
            help="Base directory for configuration, logs and relative file names"
        )

        return parser

    def _get_epilog_text(self):
        """Get the epilog help text"""
        return """
Examples:
  xmltv2vdr -c channels.conf -x guide.xml
  xmltv2vdr -c channels.conf -g genres.conf -r ratings.conf -x guide.xml -X
  xmltv2vdr -c channels.conf -x guide.xml -l 500 -L 10 --lang fr -d vdr.local
  xmltv2vdr -c channels.conf -x guide.xml -s          # print commands, no VDR

Files:
  Relative file names are resolved against the work directory.
  Default config: ~/xmltv2vdr/conf/xmltv2vdr.xml
  Lookup files are UTF-8, '#' starts a comment.

Logging Levels:
  (default)       Warnings and errors to console
  --quiet         Errors only
  --verbose       Info, warnings and errors
  --debug         All debug information to console and debug log file
"""

    def parse_args(self, argv: Optional[List[str]] = None) -> argparse.Namespace:
        """Parse and validate arguments, exit with usage on error"""
        args = self.parser.parse_args(argv)

        if args.version:
            from .. import __version__

            print(f"xmltv2vdr {__version__}")
            sys.exit(0)

        is_valid, error = self.validator.validate_all(args)
        if not is_valid:
            self.parser.error(error)

        self.args = args
        return args

    def get_setting_overrides(self, args: argparse.Namespace) -> Dict[str, Any]:
        """Configuration values given on the command line"""
        overrides = {
            setting: getattr(args, argument) for argument, setting in self.SETTING_ARGUMENTS.items()
        }
        # Flags can only switch features on
        overrides["extras"] = True if args.extras else None
        overrides["simulate"] = True if args.simulate else None
        return overrides

    def get_logging_config(self, args: argparse.Namespace) -> Dict[str, Any]:
        """Get logging configuration from arguments"""
        if args.debug:
            level = "debug"
        elif args.verbose:
            level = "info"
        elif args.quiet:
            level = "error"
        else:
            level = "warning"

        return {
            "level": level,
            "file": args.debug,
        }

    def get_system_defaults(self, workdir: Optional[str] = None) -> Dict[str, Path]:
        """Get default paths"""
        return self.path_manager.get_system_defaults(workdir)

    def error(self, message: str):
        """Print usage and exit with status 2"""
        self.parser.error(message)
