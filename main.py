#!/usr/bin/env python3
"""
ShotSub Entry Point Script

This script initializes the CLI handler and runs OCR over screenshots.
"""

from shotsub.cli import CLIHandler

if __name__ == "__main__":
    cli = CLIHandler()
    cli.run()
