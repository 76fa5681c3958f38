#!/usr/bin/env python3

from __future__ import annotations

from showscout.ui.cli import run

if __name__ == "__main__":
    run()
