from enum import Enum

FILE_MARKER = "📄"

THEME_FILES: tuple[str, ...] = (
    "style.css",
    "index.php",
    "functions.php",
    "header.php",
    "footer.php",
    "single.php",
    "page.php",
)


class PromptMode(str, Enum):
    QA = "qa"
    GENERATE = "generate"


QA_TEMPLATE = (
    "You are a WordPress development expert assistant. Answer the following WordPress-related "
    "question with detailed, accurate information. Include code examples when relevant and explain "
    "best practices. Focus only on WordPress development topics.\n"
    "\n"
    "Question: {question}\n"
    "\n"
    "Please provide a comprehensive answer that would help a WordPress developer."
)

THEME_TEMPLATE = (
    "You are a senior WordPress theme developer. Generate a complete, working WordPress theme "
    "for the following request.\n"
    "\n"
    "Request: {question}\n"
    "\n"
    "Required files:\n"
    + "".join(f"- {name}\n" for name in THEME_FILES)
    + "\n"
    "OUTPUT FORMAT (mandatory, no other format is accepted):\n"
    f"- Start every file with a line containing only {FILE_MARKER} followed by a space and the file name, "
    f"e.g. \"{FILE_MARKER} style.css\".\n"
    "- Put the full content of that file on the lines that follow.\n"
    f"- Repeat for each file. Do not use the {FILE_MARKER} character anywhere else.\n"
    "- Do not add explanations before, between or after the files.\n"
    "\n"
    "Requirements:\n"
    "- style.css must start with a valid theme header comment (Theme Name, Author, Version, "
    "Text Domain).\n"
    "- functions.php must enqueue styles with wp_enqueue_style, register navigation menus and "
    "declare add_theme_support for title-tag, post-thumbnails and html5.\n"
    "- Templates must use the_loop, get_header() and get_footer(), escape output with esc_html and "
    "esc_url, and call wp_head() and wp_footer().\n"
    "- Use semantic HTML5, a responsive mobile-first layout and modern CSS (custom properties, flexbox, "
    "grid).\n"
    "- Follow the WordPress coding standards and keep every file complete, without placeholders."
)

_TEMPLATES: dict[PromptMode, str] = {
    PromptMode.QA: QA_TEMPLATE,
    PromptMode.GENERATE: THEME_TEMPLATE,
}


def build_prompt(text: str, mode: PromptMode) -> str:
    return _TEMPLATES[mode].format(question=text)
