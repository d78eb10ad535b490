#!/usr/bin/env python3
"""Linepad - a minimal line-oriented text editor.

Usage:
    python main.py [filename]

Controls:
    Arrow keys: Move the cursor (column kept on up/down where the line allows)
    Type to insert text, Tab inserts four spaces
    Backspace: Delete character, or join with the line above at column 0
    Enter: Split the line at the cursor
    Esc: Leave the editor (asks to save when the text was modified)
"""

import sys

from linepad.__main__ import main


if __name__ == "__main__":
    sys.exit(main())
