"""Run the playground command line tool."""

from playground.tool.playground import main

if __name__ == "__main__":
    main()
