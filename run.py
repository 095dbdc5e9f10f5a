#!/usr/bin/env python3
import os
import sys

# Run the CLI from a source checkout without installing the package.
ROOT = os.path.dirname(os.path.abspath(__file__))
sys.path.insert(0, os.path.join(ROOT, "src"))

from gno_converter.cli import main

if __name__ == "__main__":
    main()
