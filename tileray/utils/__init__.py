from tileray.utils.logging_utils import parse_level, setup_logging

__all__ = ["parse_level", "setup_logging"]
