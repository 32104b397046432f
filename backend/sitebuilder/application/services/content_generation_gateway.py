"""Content Generation Gateway — structured copy from a chat model, with fallbacks.

Two failure policies coexist and callers branch on them:

* ``generate`` (website path) never raises; on any failure it returns the
  full templated fallback object built from the business profile.
* ``regenerate_text`` (banner-grid path) never raises; on failure it returns a
  short canned sentence for the requested field.

``request_json`` is the raw primitive and does raise ``ContentGenerationError``.
"""

import json
import logging
import re
from typing import Any, Literal

import httpx

from sitebuilder.application.interfaces import ChatProvider
from sitebuilder.domain.entities import BusinessProfile, ChatMessage
from sitebuilder.domain.exceptions import ChatProviderError, ContentGenerationError

logger = logging.getLogger(__name__)

BannerTextField = Literal["tagline", "headline", "subtext"]
CopyKind = Literal["page", "blog", "seo", "marketing"]

WEBSITE_SECTIONS = ("hero", "about", "services", "features", "contact", "cta")

_JSON_ONLY_SYSTEM_PROMPT = (
    "You are a professional website copywriter. "
    "Respond with a single valid JSON object only. "
    "Do not wrap it in markdown and do not add any commentary."
)

_BANNER_FIELD_INSTRUCTIONS: dict[str, str] = {
    "tagline": "a short tagline of at most six words",
    "headline": "a bold headline of at most ten words",
    "subtext": "one or two supporting sentences",
}


class ContentGenerationGateway:
    """Sends prompts to a ChatProvider and parses fixed-shape JSON answers.

    ``provider`` may be None when no API key is configured; every call then
    takes the fallback path.
    """

    def __init__(
        self,
        provider: ChatProvider | None,
        model: str,
        *,
        temperature: float = 0.7,
        max_tokens: int = 2000,
    ):
        self._provider = provider
        self._model = model
        self._temperature = temperature
        self._max_tokens = max_tokens

    # ── Raw request ─────────────────────────────────────────────────

    async def request_json(self, prompt: str) -> dict[str, Any]:
        """Run one JSON-only completion and return the parsed object.

        Raises:
            ContentGenerationError: provider missing or failing, transport
                error, or a response that is not a JSON object.
        """
        if self._provider is None:
            raise ContentGenerationError("No text-generation provider is configured")

        messages = [
            ChatMessage(role="system", content=_JSON_ONLY_SYSTEM_PROMPT),
            ChatMessage(role="user", content=prompt),
        ]
        try:
            result = await self._provider.complete(
                messages,
                self._model,
                temperature=self._temperature,
                max_tokens=self._max_tokens,
            )
        except ChatProviderError as e:
            raise ContentGenerationError(str(e)) from e
        except httpx.HTTPError as e:
            raise ContentGenerationError(f"Text-generation request failed: {e}") from e

        try:
            parsed = json.loads(self._extract_json(result.content))
        except json.JSONDecodeError as e:
            raise ContentGenerationError(f"Response is not valid JSON: {e}") from e
        if not isinstance(parsed, dict):
            raise ContentGenerationError("Response JSON is not an object")
        return parsed

    # ── Website path ────────────────────────────────────────────────

    async def generate(self, prompt: str | None, profile: BusinessProfile | None) -> dict[str, Any]:
        """Generate website copy; falls back to templates on any failure.

        Without a custom ``prompt`` the structured website prompt is used and
        sections missing from the answer are completed from the fallback.
        """
        profile = profile or BusinessProfile.placeholder()
        fallback = self.fallback_content(profile)
        try:
            content = await self.request_json(prompt or self.build_website_prompt(profile))
        except ContentGenerationError as e:
            logger.warning("Content generation failed, using fallback copy: %s", e)
            return fallback

        if prompt:
            return content
        missing = [s for s in WEBSITE_SECTIONS if not isinstance(content.get(s), dict)]
        if missing:
            logger.info("Generated copy lacks sections %s; filling from fallback", missing)
            for section in missing:
                content[section] = fallback[section]
        return content

    @staticmethod
    def build_website_prompt(profile: BusinessProfile) -> str:
        description = profile.description.strip() or "Not provided"
        return f"""Create website copy for a {profile.type} business named "{profile.name}" located in {profile.location}.
Business description: {description}

Return JSON with exactly this structure:
{{
  "hero": {{"title": "...", "subtitle": "...", "buttonText": "..."}},
  "about": {{"title": "...", "description": "...", "highlights": ["...", "...", "..."]}},
  "services": {{"title": "...", "subtitle": "...", "items": [{{"title": "...", "description": "...", "icon": "emoji"}}]}},
  "features": {{"title": "...", "subtitle": "...", "items": [{{"title": "...", "description": "...", "icon": "emoji"}}]}},
  "contact": {{"title": "...", "subtitle": "..."}},
  "cta": {{"title": "...", "subtitle": "...", "buttonText": "..."}}
}}
Provide three services and four features. Keep the tone professional and specific to {profile.location}."""

    @staticmethod
    def fallback_content(profile: BusinessProfile | None) -> dict[str, Any]:
        """Deterministic copy interpolated from the business profile."""
        p = profile or BusinessProfile.placeholder()
        return {
            "hero": {
                "title": f"Welcome to {p.name}",
                "subtitle": (
                    f"Professional {p.type} services in {p.location}. "
                    "We deliver excellence and innovation to help your business succeed."
                ),
                "buttonText": "Get Started Today",
            },
            "about": {
                "title": f"About {p.name}",
                "description": (
                    f"We are a leading {p.type} company based in {p.location}. "
                    "Our team is dedicated to providing exceptional services that meet "
                    "your unique requirements and exceed your expectations."
                ),
                "highlights": ["Expert Team", "Quality Service", "Customer Focused"],
            },
            "services": {
                "title": "Our Services",
                "subtitle": f"Comprehensive {p.type} solutions tailored to your needs",
                "items": [
                    {
                        "title": "Consulting",
                        "description": f"Expert {p.type} consulting to guide your business forward",
                        "icon": "🎯",
                    },
                    {
                        "title": "Implementation",
                        "description": f"Professional implementation of {p.type} solutions",
                        "icon": "⚡",
                    },
                    {
                        "title": "Support",
                        "description": f"Ongoing support and maintenance for your {p.type} needs",
                        "icon": "🛠️",
                    },
                ],
            },
            "features": {
                "title": "Why Choose Us",
                "subtitle": "What sets us apart in the industry",
                "items": [
                    {"title": "Experience", "description": "Years of expertise in the industry", "icon": "⭐"},
                    {"title": "Quality", "description": "Commitment to delivering the highest quality", "icon": "🏆"},
                    {"title": "Innovation", "description": "Cutting-edge solutions and approaches", "icon": "💡"},
                    {"title": "Support", "description": "24/7 customer support and assistance", "icon": "🤝"},
                ],
            },
            "contact": {
                "title": "Get In Touch",
                "subtitle": (
                    f"Ready to get started? Contact us today to learn more about our {p.type} services."
                ),
            },
            "cta": {
                "title": "Ready to Get Started?",
                "subtitle": f"Contact us today to discuss your {p.type} needs",
                "buttonText": "Contact Us Now",
            },
        }

    # ── Banner-grid path ────────────────────────────────────────────

    async def regenerate_text(self, field: BannerTextField, profile: BusinessProfile | None) -> str:
        """Fresh text for one banner-grid field; canned sentence on failure."""
        profile = profile or BusinessProfile.placeholder()
        if field not in _BANNER_FIELD_INSTRUCTIONS:
            raise ValueError(f"Unknown banner text field: {field!r}")

        prompt = (
            f"Write {_BANNER_FIELD_INSTRUCTIONS[field]} for the website banner of "
            f'"{profile.name}", a {profile.type} business in {profile.location}. '
            f'Return JSON: {{"{field}": "..."}}'
        )
        try:
            data = await self.request_json(prompt)
        except ContentGenerationError as e:
            logger.warning("Banner %s regeneration failed, using canned text: %s", field, e)
            return self.fallback_text(field, profile)

        value = data.get(field)
        if not isinstance(value, str) or not value.strip():
            logger.info("Banner %s missing from response; using canned text", field)
            return self.fallback_text(field, profile)
        return value.strip()

    @staticmethod
    def fallback_text(field: BannerTextField, profile: BusinessProfile) -> str:
        canned = {
            "tagline": f"Trusted {profile.type} in {profile.location}",
            "headline": f"Experience the best of {profile.name}",
            "subtext": f"Quality {profile.type} services tailored to you.",
        }
        return canned[field]

    # ── Free-form copy ──────────────────────────────────────────────

    @staticmethod
    def build_copy_prompt(
        kind: CopyKind,
        topic: str,
        *,
        tone: str = "professional",
        length: str = "medium",
        keywords: list[str] | None = None,
    ) -> str:
        """Prompt for page, blog, SEO or marketing copy about ``topic``."""
        keyword_text = ", ".join(keywords) if keywords else "None specified"
        if kind == "page":
            return (
                f'Create engaging page content about "{topic}".\n'
                f"Tone: {tone}\nLength: {length}\nKeywords to include: {keyword_text}\n\n"
                "Generate structured content with:\n"
                "1. Compelling headline\n2. Introduction paragraph\n"
                "3. Main content sections\n4. Call-to-action\n\n"
                'Return as JSON: {"title": "...", "content": "...", "cta": "..."}'
            )
        if kind == "blog":
            return (
                f'Write a comprehensive blog post about "{topic}".\n'
                f"Tone: {tone}\nLength: {length}\nSEO Keywords: {keyword_text}\n\n"
                "Include:\n1. Engaging title\n2. Introduction hook\n"
                "3. Main content with subheadings\n4. Conclusion with CTA\n"
                "5. Meta description for SEO\n\n"
                'Return as JSON: {"title": "...", "content": "...", "metaDescription": "...", "headings": [...]}'
            )
        if kind == "seo":
            return (
                f'Generate SEO-optimized content for "{topic}".\n'
                f"Target keywords: {keyword_text}\n\n"
                "Create:\n1. SEO title (under 60 characters)\n"
                "2. Meta description (under 160 characters)\n3. H1 heading\n"
                "4. Content outline with H2/H3 suggestions\n5. Keyword suggestions\n\n"
                "Return as JSON with proper SEO structure."
            )
        if kind == "marketing":
            return (
                f'Create marketing copy for "{topic}".\n'
                f"Tone: {tone}\nFocus keywords: {keyword_text}\n\n"
                "Generate:\n1. Compelling headline\n2. Value proposition\n"
                "3. Benefits list\n4. Strong call-to-action\n5. Social proof suggestions\n\n"
                "Return as JSON with marketing structure."
            )
        raise ValueError(f"Unknown copy kind: {kind!r}")

    @staticmethod
    def _extract_json(text: str) -> str:
        """Extract JSON from plain text or fenced blocks."""
        content = text.strip()

        fence_match = re.search(r"```(?:json)?\s*(.*?)\s*```", content, flags=re.S | re.I)
        if fence_match:
            return fence_match.group(1).strip()

        start = content.find("{")
        end = content.rfind("}")
        if start != -1 and end != -1 and end > start:
            return content[start:end + 1]

        return content
