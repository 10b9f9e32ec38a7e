"""
Path management module for xmltv2vdr

Handles default directories and file locations.
"""

from pathlib import Path
from typing import Dict, Optional


class PathManager:
    """Manages default paths"""

    @staticmethod
    def get_system_defaults(workdir: Optional[Path] = None) -> Dict[str, Path]:
        """
        Get default directories

        Args:
            workdir: Base directory override

        Returns:
            Dict containing base_dir, conf_dir, log_dir and file paths
        """
        base_dir = Path(workdir).expanduser() if workdir else Path.home() / "xmltv2vdr"

        return {
            "base_dir": base_dir,
            "conf_dir": base_dir / "conf",
            "log_dir": base_dir / "log",
            "config_file": base_dir / "conf" / "xmltv2vdr.xml",
            "log_file": base_dir / "log" / "debug.log",
        }

