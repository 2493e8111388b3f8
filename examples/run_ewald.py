"""Run Ewald energy calculations from a JSON input file.

Usage examples:
  python examples/run_ewald.py --write-template examples/configs/ewald_template.json
  python examples/run_ewald.py --input examples/configs/ewald_template.json
"""

from ewaldpy.workflows.ewald_run import main


if __name__ == "__main__":
    main()
