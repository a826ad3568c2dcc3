from rich.pretty import pprint

from arglet import *
from arglet.diagnostics import configure_logging

parser = Parser("arglet-demo", "parse the command line and print the structured result", shell=True, colorful=True)
parser.add_command("build", "build the project")
parser.add_command("test", "run the test suite")
parser.add_flag("verbose", "print more details", abbr="v")
parser.add_flag("quiet", "print nothing but errors", abbr="q")
parser.add_option("mode", "execution mode", abbr="m", default="fast", allowed=("fast", "slow"))
parser.add_option("output", "where to write the report", abbr="o")


if __name__ == '__main__':
    configure_logging()
    pprint(invoke(parser))
