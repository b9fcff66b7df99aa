"""URL key formatting utilities.

The generator keeps whatever value it is given; these helpers turn free text
such as a product name into a URL-safe key before generation.
"""

from slugify import slugify


def format_url_key(text: str, max_length: int = 0) -> str:
    """Generate a URL-safe key from text.

    Args:
        text: Input text (e.g., product name)
        max_length: Maximum key length, 0 for no limit

    Returns:
        URL-safe key, empty if text has no usable characters

    Examples:
        >>> format_url_key("Blue Suede Shoes")
        'blue-suede-shoes'
        >>> format_url_key("Café & Crème Brûlée")
        'cafe-creme-brulee'
    """
    return slugify(text, max_length=max_length, word_boundary=bool(max_length), separator="-")
