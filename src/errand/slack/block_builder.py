from abc import ABC, abstractmethod

from errand.utils.format import entry_text

INPUT_BLOCK_PREFIX = "todo_input"
FORM_BLOCK_ID = "todo_form"
TITLE_ACTION_ID = "todo_title"
ADD_ACTION_ID = "add_todo"
COMPLETE_ACTION_ID = "complete_todo"
DELETE_ACTION_ID = "delete_todo"
EMPTY_BLOCK_ID = "todo_empty"


def section_block_id(todo_id):
    return f"todo_section_{todo_id}"


def actions_block_id(todo_id):
    return f"todo_actions_{todo_id}"


def todo_id_of_block(block):
    """todo id an entry block belongs to, None for page furniture"""
    block_id = block.get("block_id") or ""
    for prefix in ("todo_section_", "todo_actions_"):
        if block_id.startswith(prefix):
            try:
                return int(block_id[len(prefix):])
            except ValueError:
                return None
    return None


class BlockStyle(ABC):
    @abstractmethod
    def build_header_blocks(self, input_block_id):
        pass

    @abstractmethod
    def build_single_todo_blocks(self, task):
        pass

    @abstractmethod
    def build_empty_blocks(self):
        pass

    def build_buttons(self, task, complete_text, delete_text):
        elements = []
        if not task.is_complete:
            elements.append(
                {
                    "type": "button",
                    "text": {"type": "plain_text", "text": complete_text},
                    "style": "primary",
                    "action_id": COMPLETE_ACTION_ID,
                    "value": str(task.id),
                }
            )
        elements.append(
            {
                "type": "button",
                "text": {"type": "plain_text", "text": delete_text},
                "style": "danger",
                "action_id": DELETE_ACTION_ID,
                "value": str(task.id),
            }
        )
        return {
            "type": "actions",
            "block_id": actions_block_id(task.id),
            "elements": elements,
        }

    def build_form_blocks(self, input_block_id, placeholder, button_text):
        return [
            {
                "type": "input",
                "block_id": input_block_id,
                "dispatch_action": True,
                "element": {
                    "type": "plain_text_input",
                    "action_id": TITLE_ACTION_ID,
                    "placeholder": {"type": "plain_text", "text": placeholder},
                    "dispatch_action_config": {
                        "trigger_actions_on": ["on_enter_pressed"]
                    },
                },
                "label": {"type": "plain_text", "text": "New todo"},
            },
            {
                "type": "actions",
                "block_id": FORM_BLOCK_ID,
                "elements": [
                    {
                        "type": "button",
                        "text": {"type": "plain_text", "text": button_text},
                        "style": "primary",
                        "action_id": ADD_ACTION_ID,
                    }
                ],
            },
        ]

    def build_alert_view(self, message):
        return {
            "type": "modal",
            "title": {"type": "plain_text", "text": "Errand"},
            "close": {"type": "plain_text", "text": "OK"},
            "blocks": [
                {
                    "type": "section",
                    "text": {"type": "mrkdwn", "text": f"⚠️ {message}"},
                }
            ],
        }


class StandardBlockStyle(BlockStyle):
    """
    Build Slack blocks for todos (Standard Style).
    """

    def build_header_blocks(self, input_block_id):
        blocks = [
            {
                "type": "header",
                "text": {"type": "plain_text", "text": "📋 Todos"},
            }
        ]
        blocks.extend(self.build_form_blocks(input_block_id, "What needs doing?", "Add"))
        blocks.append({"type": "divider"})
        return blocks

    def build_single_todo_blocks(self, task):
        section_block = {
            "type": "section",
            "block_id": section_block_id(task.id),
            "text": {"type": "plain_text", "text": entry_text(task)},
        }
        return [section_block, self.build_buttons(task, "✔ Complete", "❌ Delete")]

    def build_empty_blocks(self):
        return [
            {
                "type": "context",
                "block_id": EMPTY_BLOCK_ID,
                "elements": [{"type": "mrkdwn", "text": "_No todos found._"}],
            }
        ]


class SaaSBlockStyle(BlockStyle):
    """
    Build Slack blocks with a clean 'SaaS/Developer' aesthetic.
    Using Inline Code styles for badges instead of emojis.
    """

    def build_header_blocks(self, input_block_id):
        blocks = [
            {
                "type": "header",
                "text": {"type": "plain_text", "text": "TASK DIGEST"},
            },
            {"type": "divider"},
        ]
        blocks.extend(self.build_form_blocks(input_block_id, "Add a task", "Create"))
        blocks.append({"type": "divider"})
        return blocks

    def build_single_todo_blocks(self, task):
        if task.is_complete:
            content_display = f"~{task.title}~"
            status_badge = "` DONE `"
        else:
            content_display = task.title
            status_badge = "` OPEN `"

        section_block = {
            "type": "section",
            "block_id": section_block_id(task.id),
            "text": {
                "type": "mrkdwn",
                "text": f"*{content_display}*\n{status_badge}  ` #{task.id} `",
            },
        }
        return [section_block, self.build_buttons(task, "Done", "Delete")]

    def build_empty_blocks(self):
        return [
            {
                "type": "context",
                "block_id": EMPTY_BLOCK_ID,
                "elements": [{"type": "mrkdwn", "text": "Total: 0"}],
            }
        ]


class BlockBuilder:
    _style = StandardBlockStyle()

    @classmethod
    def set_style(cls, style_name: str):
        """
        Set the block style.
        Options: 'standard', 'saas'
        """
        if style_name.lower() == "standard":
            cls._style = StandardBlockStyle()
        elif style_name.lower() == "saas":
            cls._style = SaaSBlockStyle()
        else:
            raise ValueError(f"Unknown style: {style_name}")

    @classmethod
    def build_header_blocks(cls, input_block_id=INPUT_BLOCK_PREFIX):
        return cls._style.build_header_blocks(input_block_id)

    @classmethod
    def build_single_todo_blocks(cls, task):
        return cls._style.build_single_todo_blocks(task)

    @classmethod
    def build_empty_blocks(cls):
        return cls._style.build_empty_blocks()

    @classmethod
    def build_page_blocks(cls, tasks, input_block_id=INPUT_BLOCK_PREFIX):
        blocks = cls.build_header_blocks(input_block_id)
        for task in tasks:
            blocks.extend(cls.build_single_todo_blocks(task))
        if not tasks:
            blocks.extend(cls.build_empty_blocks())
        return blocks

    @classmethod
    def build_alert_view(cls, message):
        return cls._style.build_alert_view(message)
