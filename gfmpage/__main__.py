import sys

from gfmpage.cli.md_to_html import main

if __name__ == "__main__":
    sys.exit(main())
