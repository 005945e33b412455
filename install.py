#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Entry point for the TAK server setup, runnable from a source checkout.
"""

import sys

from tak_setup.main_installer import main

if __name__ == "__main__":
    sys.exit(main())
