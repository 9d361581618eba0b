"""
CLI entry point for the pytest-based `litedebug` command.

It is available in a prompt once the package is installed:

```
pip install -e .
litedebug --help
```

It can also be executed (and debugged) directly in an interactive python shell:

```
from click.testing import CliRunner
from cli.pytest_commands.litedebug import litedebug

runner = CliRunner()
result = runner.invoke(litedebug, ["--help"])
print(result.output)
```
"""
