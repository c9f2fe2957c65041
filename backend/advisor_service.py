"""
GreenTrack India: AI Sustainability Advisor
Answers user questions through an OpenAI-compatible chat completion
endpoint (OpenRouter). Falls back to deterministic keyword-matched canned
plans if the API key is not set, the request fails, or the reply is empty.
"""

import logging
from typing import List, Optional, Sequence

import httpx

from advice_library import render_advice_html, select_plan
from config import Settings, get_settings
from http_client import post_json
from models import AdvisoryMessage

logger = logging.getLogger(__name__)

HISTORY_WINDOW = 10
TEMPERATURE    = 0.7
MAX_TOKENS     = 800

GREETING = (
    "Hello! I'm your GreenLedger AI Assistant. Ask me anything about carbon emissions, "
    "renewable energy, solar installations, or sustainability tips for India! Try asking "
    'about "solar panels for AC" or "LED lighting savings".'
)

SYSTEM_PROMPT = """You are GreenLedger AI, a professional sustainability advisor for Indian homes, schools, and small businesses.

GOAL: Whenever solar panels or renewable energy are recommended, ALWAYS include:
- A brief setup process (in 2–3 clear steps)
- Estimated cost range (₹)
- Expected monthly savings (₹)
- Payback period (years)
- Estimated CO₂ reduction (tons/year)
- A relevant government subsidy or policy with clickable link

RESPONSE FORMAT (ALWAYS FOLLOW THIS STRUCTURE):
<ol>
  <li><b>Step 1 – Current Energy Efficiency:</b> Short advice on appliance optimization before solar. <i>Expected benefit:</i> Reduced baseline energy usage.</li>
  <li><b>Step 2 – Renewable Transition (Solar Setup):</b> Explain setup in 2–3 lines: system capacity, cost (₹), installation time. <i>Expected benefit:</i> Reduced grid dependency.</li>
  <li><b>Step 3 – Financial & Environmental Impact:</b> Monthly savings (₹X–₹Y), payback period (~X years), annual CO₂ reduction (~X tons/year). <i>Expected benefit:</i> Long-term cost reduction.</li>
  <li><b>Step 4 – Government Support:</b> 1–2 verified Indian schemes with clickable links using <a href="...">text</a>.</li>
  <li><b>Step 5 – Maintenance & Monitoring:</b> 1–2 steps to maintain efficiency. <i>Expected benefit:</i> Optimal performance year-round.</li>
  <li><b>Step 6 – Final Recommendation:</b> Short actionable summary with concrete savings estimate.</li>
</ol>

STYLE RULES:
- Formal, structured step-by-step format using <ol> and <li>
- Real numeric estimates for ₹ savings, ROI, and CO₂ cuts (rounded)
- NO formulas or calculation steps shown
- Business-friendly tone (like a sustainability consultant)
- Use only: <b>, <i>, <a>, <ol>, <li>, <br>
- Use Indian conventions (₹, kW, month/year)"""


def local_response(user_text: str) -> str:
    """Canned six-step plan for the first matching keyword. Same input, same output."""
    return render_advice_html(select_plan(user_text))


def build_messages(user_text: str, history: Sequence[AdvisoryMessage]) -> List[dict]:
    recent = list(history)[-HISTORY_WINDOW:]
    return [
        {"role": "system", "content": SYSTEM_PROMPT},
        *({"role": m.role, "content": m.content} for m in recent),
        {"role": "user", "content": user_text},
    ]


def _extract_content(data) -> Optional[str]:
    try:
        content = data["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError):
        return None
    if not isinstance(content, str) or not content.strip():
        return None
    return content


async def generate_reply(
    user_text: str,
    history: Sequence[AdvisoryMessage] = (),
    *,
    client: Optional[httpx.AsyncClient] = None,
    settings: Optional[Settings] = None,
) -> dict:
    """
    Returns {"content": html, "generated_by": model name or "template"}.
    Never raises for upstream problems.
    """
    settings = settings or get_settings()

    if not settings.llm_configured:
        logger.info("OPENROUTER_API_KEY not set, using canned advice.")
        return {"content": local_response(user_text), "generated_by": "template"}

    headers = {
        "Authorization": f"Bearer {settings.openrouter_api_key}",
        "HTTP-Referer":  settings.app_origin,
        "X-Title":       settings.app_title,
    }
    payload = {
        "model":       settings.openrouter_model,
        "messages":    build_messages(user_text, history),
        "temperature": TEMPERATURE,
        "max_tokens":  MAX_TOKENS,
    }

    result = await post_json(
        settings.openrouter_url, payload, headers=headers,
        client=client, timeout=settings.http_timeout,
    )
    if not result.ok:
        logger.warning(f"[Advisor] OpenRouter failed ({result.error}), using canned advice.")
        return {"content": local_response(user_text), "generated_by": "template"}

    content = _extract_content(result.data)
    if content is None:
        logger.warning("[Advisor] OpenRouter returned no content, using canned advice.")
        return {"content": local_response(user_text), "generated_by": "template"}

    logger.info(f"[Advisor] reply via {settings.openrouter_model} ({len(content)} chars)")
    return {"content": content, "generated_by": settings.openrouter_model}


async def respond(
    user_text: str,
    history: Sequence[AdvisoryMessage] = (),
    **kwargs,
) -> str:
    return (await generate_reply(user_text, history, **kwargs))["content"]


class ChatSession:
    """Append-only conversation; older turns stay visible but only the last ten go upstream."""

    def __init__(self, *, client: Optional[httpx.AsyncClient] = None, settings: Optional[Settings] = None):
        self._client = client
        self._settings = settings
        self.messages: List[AdvisoryMessage] = [AdvisoryMessage(role="assistant", content=GREETING)]

    async def send(self, text: str) -> Optional[AdvisoryMessage]:
        text = text.strip()
        if not text:
            return None

        prior = list(self.messages)
        self.messages.append(AdvisoryMessage(role="user", content=text))
        reply = await respond(text, prior, client=self._client, settings=self._settings)
        message = AdvisoryMessage(role="assistant", content=reply)
        self.messages.append(message)
        return message
