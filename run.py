#!/usr/bin/env python3
"""wordcrawl entry point: python run.py [-d N] [-p N] [-v] [-limit MS] URL"""
import sys

from wordcrawl.cli import main


if __name__ == '__main__':
    sys.exit(main())
