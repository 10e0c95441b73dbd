"""Module entrypoint for running WhatExec as ``python -m whatexec``."""

from __future__ import annotations

from whatexec.cli import main


if __name__ == "__main__":
    main()
