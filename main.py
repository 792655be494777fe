"""
Main entry point for the Ice Rink refrigeration demo

Launch the demonstration with: python main.py

Author: Ice Rink Refrigeration Project
Date: 2026-10-17
"""

from app_icerink.demo import main

if __name__ == "__main__":
    main()
