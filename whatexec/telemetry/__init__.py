"""Run-event logging for the command line interface."""

from .logger import RunLogger

__all__ = ["RunLogger"]
