"""Module entry point: python -m ezvrates"""
import sys

from ezvrates.app import main

sys.exit(main())
