"""Run the service: python -m app_service [args...]"""
import sys

from app_service.main import main

if __name__ == "__main__":
    sys.exit(main())
