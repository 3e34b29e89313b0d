"""
CLI entry point, when used as a module: `python -m kgeneric`.

Useful for debugging in the IDEs (use the start-mode "Module", module "kgeneric").
"""
from kgeneric import cli

if __name__ == '__main__':
    cli.main()
