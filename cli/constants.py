"""CLI constants and configuration."""

from prompt_toolkit.styles import Style

COMMANDS = ["upload", "download", "delete", "list", "fail", "recover", "nodes", "clear", "exit", "help"]

STYLE = Style.from_dict(
    {
        "prompt": "#00afaf bold",
    }
)

CYAN = "\033[36m"
RESET = "\033[0m"

BANNER = f"""{CYAN}
=== DISTRIBUTED FILE SYSTEM ==={RESET}"""

WELCOME_TITLE = "Commands: upload, download, delete, list, fail, recover, nodes, exit"
WELCOME_HELP = "Type 'help' for commands or 'exit' to quit.\n"

PROMPT_TEXT = "DFS> "

HELP_TEXT = """Available commands:
  upload <path> [key]                 Replicate a local file (key defaults to the file name)
  download <key> [output_path]        Download a file (defaults to downloaded_<key>)
  delete <key>                        Delete a file from every node holding it
  list                                List files and the nodes holding their replicas
  fail <nodeId>                       Mark a node as failed and check replica health
  recover <nodeId>                    Mark a node as active and check replica health
  nodes                               Show node status
  clear                               Clear screen and redisplay welcome message
  help                                Show this help
  exit                                Exit REPL (all cluster state is lost)

Examples:
  upload a.txt
  fail 1
  download a.txt
  download a.txt copies/a.txt
  recover 1
  delete a.txt"""
