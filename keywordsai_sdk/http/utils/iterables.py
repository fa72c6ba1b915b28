def remove_empty_values(dictionary: dict) -> dict:
    """Remove empty values from a dictionary.

    Args:
        dictionary: The dictionary to remove empty values from.

    Returns:
        The dictionary with empty values removed.
    """
    return {k: v for k, v in dictionary.items() if v is not None}
