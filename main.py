#!/usr/bin/env python3
"""Run the errchain CLI from a source checkout: ``python main.py demo -f +v``."""

from errchain.cli import main

if __name__ == "__main__":
    main()
