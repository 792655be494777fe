"""
Entry point for the Ice Rink refrigeration demo

Allows running the demonstration with: python -m app_icerink

Author: Ice Rink Refrigeration Project
Date: 2026-10-17
"""

from app_icerink.demo import main

if __name__ == "__main__":
    main()
