import logging

from wp_assistant.prompts.templates import PromptMode

logger = logging.getLogger(__name__)

# Plain substring containment: "wp" also matches inside "swap", "action" inside "transaction".
WORDPRESS_KEYWORDS: tuple[str, ...] = (
    "wordpress",
    "wp",
    "theme",
    "plugin",
    "shortcode",
    "functions.php",
    "elementor",
    "woocommerce",
    "hook",
    "filter",
    "action",
    "acf",
    "wp-admin",
    "custom post type",
    "wp_query",
    "wp_enqueue",
    "wp_head",
    "wp_footer",
    "gutenberg",
    "block editor",
    "wp-cli",
    "multisite",
    "wp_mail",
    "wp_insert_post",
    "wp_get_posts",
    "the_loop",
    "wp_nav_menu",
    "wp_customize",
    "rest api",
    "wp-json",
)

THEME_INTENT_PHRASES: tuple[str, ...] = (
    "create theme",
    "generate theme",
    "build theme",
    "make theme",
    "theme for",
)


def _contains_any(text: str, needles: tuple[str, ...]) -> bool:
    lowered = text.lower()
    return any(needle in lowered for needle in needles)


def is_in_scope(text: str) -> bool:
    """True when any WordPress keyword occurs anywhere in ``text``, ignoring case."""
    return _contains_any(text, WORDPRESS_KEYWORDS)


def wants_generation(text: str) -> bool:
    """True when ``text`` asks for a theme to be generated."""
    return _contains_any(text, THEME_INTENT_PHRASES)


def route(text: str) -> PromptMode | None:
    """Pick the prompt mode for ``text``, or None when it must be rejected.

    Theme-intent requests bypass the topic gate entirely.
    """
    if wants_generation(text):
        mode: PromptMode | None = PromptMode.GENERATE
    elif is_in_scope(text):
        mode = PromptMode.QA
    else:
        mode = None
    logger.info("route.decided mode=%s chars=%d", mode.value if mode else "reject", len(text))
    return mode
