from rich.pretty import pprint

from bindery import *

tool = Command("tool")

force = tool.bool_option("f force", False, "overwrite existing files", env_var="TOOL_FORCE")
threads = tool.int_option("t threads", 4, "worker count", env_var="TOOL_THREADS THREADS")
tags = tool.strings_option("tag", [], "labels to attach", env_var="TOOL_TAGS")
path = tool.string_argument("PATH", ".", "where to work")


if __name__ == '__main__':
    tool.assign("--tag", "nightly")
    pprint(tool)
    pprint({record.name: record.display for record in (*tool.options, *tool.arguments)})
