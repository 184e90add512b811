SEARCH_PROMPT = "/"


def search_prompt(text, width):
    """Prompt text for the search line, scrolled so its end stays on screen."""
    shown = f"{SEARCH_PROMPT}{text}"
    room = max(1, width - 1)  # keep one cell for the cursor
    if len(shown) > room:
        shown = shown[-room:]
    return shown


def render_status(context, width):
    """
    context keys: searching, search_text, percent, total_lines, message
    """
    if context.get('searching'):
        text = search_prompt(context.get('search_text', ''), width)
    else:
        percent = context.get('percent', 0)
        total = context.get('total_lines', 0)
        text = f" {percent}% of {total} lines"
        if context.get('message'):
            text = f"{text} | {context['message']}"

    return text.ljust(width)[:width]
