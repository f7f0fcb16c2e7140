"""CalcAtten — Entry Point."""
from calcatten.application import main


if __name__ == "__main__":
    main()
