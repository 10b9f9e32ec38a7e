"""
Argument validation module for xmltv2vdr

Handles validation of command-line arguments: lengths, port and timeout.
"""

from typing import Optional, Tuple


class ArgumentValidator:
    """Validates command-line arguments"""

    @classmethod
    def validate_non_negative(cls, option: str, value: Optional[int]) -> Tuple[bool, Optional[str]]:
        """
        Validate a count that must not be negative

        Args:
            option: Option name for the error message
            value: Value to validate

        Returns:
            Tuple of (is_valid, error_message)
        """
        if value is None:
            return True, None

        if value < 0:
            return False, f"Parameter [{option}] out of range, got: {value}"

        return True, None

    @classmethod
    def validate_port(cls, port: Optional[int]) -> Tuple[bool, Optional[str]]:
        """Validate SVDRP port (0-65535)"""
        if port is None:
            return True, None

        if port < 0 or port > 65535:
            return False, f"Parameter [--port] out of range, got: {port}"

        return True, None

    @classmethod
    def validate_all(cls, args) -> Tuple[bool, Optional[str]]:
        """
        Validate all arguments

        Args:
            args: Parsed arguments namespace

        Returns:
            Tuple of (is_valid, first_error_message)
        """
        checks = [
            cls.validate_non_negative("--desclen", args.desclen),
            cls.validate_non_negative("--credits", args.credits),
            cls.validate_non_negative("--timeout", args.timeout),
            cls.validate_port(args.port),
        ]

        for is_valid, error in checks:
            if not is_valid:
                return False, error

        return True, None
