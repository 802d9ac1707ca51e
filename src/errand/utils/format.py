def entry_text(task):
    """Text shown for one rendered entry, e.g. `Buy milk - incomplete`"""
    return f"{task.title} - {task.status.value}"


def format_tasks(tasks):
    if not tasks:
        return "_No todos found._"
    task_lines = []
    for task in tasks:
        line = f"- [ID: {task.id}] {entry_text(task)}"
        task_lines.append(line)
    return "\n".join(task_lines)


def help_string():
    return (
        "*Errand Command Help:*\n"
        "• `/todo list`\n"
        "• `/todo add <title>`\n"
        "  (Example: `/todo add 'Buy milk'`)\n"
        "• `/todo done <id>`: mark a todo complete\n"
        "• `/todo rm <id>`: delete a todo\n"
        "• `/todo help`\n"
        "Open the app's *Home* tab for the interactive list."
    )
