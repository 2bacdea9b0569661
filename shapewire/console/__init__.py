"""Rich, structured console output for shapewire.

Usage:
    from shapewire.console import logger

    logger.step(1, 2, "DenseLayer name=fc [InputTypeFeedForward(size=8)] → ...")
    logger.success("Network wired: 2 layers → InputTypeFeedForward(size=10)")

    try:
        compiler.compile(network)
    except ShapeError as e:
        logger.failure(e)
"""
from shapewire.console.logger import Logger, get_logger

# Module-level singleton for convenient import
logger = get_logger()

__all__ = ["Logger", "get_logger", "logger"]
