"""Directives sent to the language model."""

from automate.domain.catalog import EndpointCatalog, catalog_to_prompt, display_name

COMMAND_ROLE = "You are an AI assistant for a business management system."
IMAGE_ROLE = (
    "You are an AI assistant analyzing business documents/images for a management system."
)

COMMAND_SCHEMA = """{
  "intent": "what the user wants to do",
  "action": "specific action to take",
  "parameters": {"name": "value pairs extracted from the command"},
  "apiCall": {
    "endpoint": "exact API endpoint to call, with every {placeholder} filled in",
    "method": "GET | POST | PUT | DELETE",
    "payload": "request body object if needed, otherwise null"
  },
  "response": "friendly response to user"
}"""

IMAGE_SCHEMA = """{
  "analysis": "description of what you see",
  "extractedData": {"name": "value pairs extracted from the image"},
  "suggestedActions": ["list of suggested actions"],
  "apiCalls": [{"endpoint": "api to call", "method": "GET | POST | PUT | DELETE", "payload": "data to send"}],
  "response": "friendly response to user"
}"""


def build_command_directive(
    instruction: str,
    domain_area: str,
    catalog: EndpointCatalog,
    source: str = "voice",
) -> str:
    label = "Voice command" if source == "voice" else "Text command"
    return f"""{COMMAND_ROLE}

Available API endpoints:
{catalog_to_prompt(catalog)}

The user wants to work with: {display_name(domain_area)}

Analyze the {source} command and return only a JSON object with:
{COMMAND_SCHEMA}

Only use endpoints listed above. If you cannot determine a specific API call, set apiCall to null.

{label}: "{instruction}"
"""


def build_image_directive(domain_area: str, catalog: EndpointCatalog) -> str:
    return f"""{IMAGE_ROLE}

Available API endpoints:
{catalog_to_prompt(catalog)}

Context: User is working with {display_name(domain_area)}

Analyze this image and extract relevant business data. Return only a JSON object with:
{IMAGE_SCHEMA}

Only use endpoints listed above. Use an empty apiCalls list when no call is warranted."""
