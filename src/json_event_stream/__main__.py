"""Entry point for running as a module: python -m json_event_stream"""

from .cli import main

if __name__ == "__main__":
    main()
