"""
Shared LLM utilities for extracting content from LLM responses.

Handles the response formats returned by Google Gemini through LangChain.
"""


def extract_content_as_string(response) -> str:
    """
    Safely extract content from an LLM response as a string.

    Handles cases where response.content might be:
    - A string (most common)
    - A list of content blocks (Gemini returns [{'type': 'text', 'text': '...'}])
    - A dict content block

    Args:
        response: LLM response object or content

    Returns:
        Content as a plain string
    """
    if hasattr(response, 'content'):
        content = response.content
    else:
        content = response

    return normalize_content_to_string(content)


def normalize_content_to_string(content) -> str:
    """
    Normalize any content type to a plain string.

    Args:
        content: Content that may be string, list, or dict

    Returns:
        Plain string content
    """
    if isinstance(content, str):
        return content
    elif isinstance(content, list):
        text_parts = []
        for item in content:
            if isinstance(item, dict):
                if 'text' in item:
                    text_parts.append(item['text'])
                elif 'content' in item:
                    text_parts.append(item['content'])
                else:
                    text_parts.append(str(item))
            elif isinstance(item, str):
                text_parts.append(item)
            elif item is not None:
                text_parts.append(str(item))
        # JSON may be split across blocks, so join without separators
        return "".join(text_parts)
    elif isinstance(content, dict):
        if 'text' in content:
            return content['text']
        elif 'content' in content:
            return content['content']
        else:
            return str(content)
    else:
        return str(content) if content else ""


def strip_code_fences(text: str) -> str:
    """Remove a surrounding ``` / ```json fence if the model added one."""
    s = text.strip()
    if not s.startswith("```"):
        return s

    lines = s.splitlines()
    if lines and lines[0].strip().startswith("```"):
        lines = lines[1:]
    if lines and lines[-1].strip().startswith("```"):
        lines = lines[:-1]
    return "\n".join(lines).strip()
