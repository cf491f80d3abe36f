import json
import logging

import requests

from config import GROQ_API_KEY, GROQ_API_URL, LLM_MODEL, LLM_TIMEOUT

logger = logging.getLogger(__name__)


def chat_completion(messages, model=LLM_MODEL, temperature=0.7, max_tokens=500):
    """Send one chat-completion request and return the assistant's text."""
    headers = {
        "Authorization": f"Bearer {GROQ_API_KEY}",
        "Content-Type": "application/json"
    }

    payload = {
        "model": model,
        "messages": messages,
        "temperature": temperature,
        "max_tokens": max_tokens,
    }

    response = requests.post(GROQ_API_URL, headers=headers, json=payload, timeout=LLM_TIMEOUT)

    try:
        response.raise_for_status()
    except requests.exceptions.HTTPError as e:
        logger.error("LLM request failed: %s", e)
        logger.debug("Response content: %s", response.text)
        raise

    return response.json()["choices"][0]["message"]["content"]


def extract_json(text, opener="{"):
    """
    Pull the outermost JSON object (or array, with opener="[") out of a
    model reply that may be wrapped in prose or code fences.
    """
    closer = "}" if opener == "{" else "]"
    start = text.find(opener)
    end = text.rfind(closer)
    if start == -1 or end <= start:
        raise ValueError("No JSON payload in model response")
    return json.loads(text[start:end + 1])
