#!/usr/bin/env python3
"""Uninstall kusion from this machine."""

from __future__ import annotations

from kusion_uninstall.cli import main

if __name__ == "__main__":
    main()
