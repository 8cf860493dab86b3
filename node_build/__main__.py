"""Allows running the orchestrator with python -m node_build"""
from node_build.main import main

if __name__ == "__main__":
    main()
