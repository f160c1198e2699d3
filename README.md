# minishell

A small interactive command shell for POSIX systems. It reads command lines
and checks them for syntax errors. It expands `$NAME` and `$?`, then runs
builtins in the shell itself and other programs as child processes, joined
by pipes.

## Installation

```
pip install .
```

## Usage

```
minishell
```

The prompt is `minishell: `. Ctrl-D prints `exit` and ends the session.
`exit [n]` also ends it. Ctrl-C at the prompt starts a fresh line. Ctrl-\ is
ignored. Lines are added to the readline history when the `readline` module
is available.

### Command lines

- Pipelines: `ls -l | grep py | wc -l`.
- Redirections: `< file`, `> file` (truncate), `>> file` (append). Files are
  created with mode 0644. When several redirect the same stream, the last
  one wins. A stage whose stdout is redirected to a file does not write to
  the pipe.
- Quoting: text in single quotes is kept literal. Text in double quotes still
  expands variables. Quoted and unquoted pieces that touch each other join
  into one word, for example `a"b"'c'` gives `abc`.
- Expansion: `$NAME` is replaced by the variable's value, or by nothing if
  the variable is unset. `$?` is replaced by the last exit status. A `$`
  that does not start a name is kept as it is.
- Heredocs: `cmd << EOF` reads lines at a `> ` prompt until a line equal to
  the delimiter, or until end of input. Ctrl-C cancels the whole line.
  Variables in the body are expanded unless any part of the delimiter is
  quoted.

Programs are looked up in `$PATH`. A name that contains `/`, or any name
when `PATH` is unset, is used as given. An unknown command prints
`<name>: command not found` and sets status 127. A file that exists but is
not executable sets status 126.

### Builtins

`echo [-n] args...`, `cd [dir]` (defaults to `$HOME`), `pwd`, `env`,
`export [NAME=value ...]`, `unset NAME...`, `exit [n]`.

`export` with no arguments lists the variables as `declare -x NAME="value"`.
An invalid name is reported, the other arguments are still applied, and the
status becomes 1. `exit` with a non-numeric argument exits with status 2.

When a builtin is the only command on the line, it runs in the shell and can
change the shell's directory and variables. Inside a pipeline it runs in a
child process, so such changes are lost.

### Syntax errors

These are reported on stderr and set the status to 2:

- a line that starts with `|`
- a line that ends with `|`
- two pipes in a row
- a redirection with no target, or one followed by another operator
- an unmatched quote (`UNMATCHED QUOTE`)

## Using it as a library

```python
from minishell.environment import Environment
from minishell.shell import process_line

env = Environment.from_envp(["HOME=/tmp", "PATH=/usr/bin:/bin"])
status = process_line("echo hello | tr a-z A-Z", env, input)
```

`process_line` returns the new exit status. The `exit` builtin raises
`minishell.builtins.ShellExit`, whose `code` attribute holds the status to
exit with.

The separate stages are also available:

- `minishell.syntax`: `check_syntax`, which raises `ShellSyntaxError`, and
  `find_error`.
- `minishell.lexer`: `Lexer`, `Token` and `TokenType`.
- `minishell.parser`: `build_command_list`, which returns a list of
  `minishell.command.Command` objects.
- `minishell.expand`: `expand_variables`.
- `minishell.executor`: `execute`, `run_pipeline` and `find_command_path`.
- `minishell.builtins`: the builtins themselves. They write to any text
  stream passed in.
- `minishell.status`: `status_get` and `status_set`, the last exit status.

For debugging, `minishell.command.format_commands` renders a plain listing of
a parsed line. `minishell.ast_print.print_ast` prints a coloured tree of it.

## What it does not do

- A heredoc body is read and stored with the command, but the executor does
  not feed it to the command's standard input.
- There is no `;`, `&&`, `||` list syntax, no subshells, no background jobs,
  no globbing and no job control.
- `export NAME` without `=value` is accepted but defines nothing.
- A process killed by a signal leaves the previous exit status unchanged.