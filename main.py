# main.py
import sys

from bigfile_explorer.cli.cli import CLI

def main():
    # Serve the API unless a command was given
    args = sys.argv[1:] or ["serve"]
    sys.exit(CLI().main(args))

if __name__ == "__main__":
    main()
