"""Command-line interface."""
from spirodesign.main import main

if __name__ == "__main__":
    main()
