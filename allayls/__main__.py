"""
This file is executed when running: python -m allayls
"""
from allayls.main import main

if __name__ == "__main__":
    main()
