#!/usr/bin/env python3
from lambda_cloner.cli import run

if __name__ == "__main__":
    run()
