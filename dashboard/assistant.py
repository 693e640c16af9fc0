# dashboard/assistant.py
"""
AI commentary on top of the numeric endpoints.

Every call here degrades to a fixed Korean message when the generator is
unconfigured or fails; the numbers the caller already computed are returned
untouched either way.
"""
import json
import logging

from core.exceptions import TextGenerationError
from .generators import get_text_generator

logger = logging.getLogger(__name__)

KEY_MISSING_MESSAGE = "죄송합니다. AI 서비스 키가 설정되지 않았습니다. 관리자에게 문의해주세요. 😓"
CHAT_FALLBACK_MESSAGE = "AI 연결 중 오류가 발생했습니다. 잠시 후 다시 시도해주세요."
BRIEFING_FALLBACK_MESSAGE = "죄송합니다. AI 분석 중 오류가 발생했습니다."
ADVICE_FALLBACK_MESSAGE = "AI 분석에 실패했습니다. 잠시 후 다시 시도해주세요."

ASSISTANT_PROMPT = """
You are 'Sales Keeper', a smart and friendly restaurant financial manager AI.
Your goal is to help the store owner understand their financial data and make better decisions.

**Context Data (Current Store Status):**
{context}

**Rules:**
1. Always speak in Korean (polite, friendly tone like "사장님, ~입니다").
2. Use the provided context data to back up your answers. If data is missing, say so politely.
3. Give specific numbers if available. Don't be vague.
4. Keep answers concise (max 3-4 sentences) unless asked for a detailed report.
5. Encouraging but realistic. Celebrate high sales, warn about high costs.
"""

BRIEFING_REQUEST = "오늘 하루 매장 상황을 2-3문장으로 브리핑해주세요."

ADVICE_REQUEST = (
    "'{name}' 메뉴에 대한 전략을 조언해주세요. "
    "판매가 {price:,}원, 원가 {cost:,}원, 마진율 {margin}%, "
    "판매량 {quantity}개, 총 수익 {profit:,}원, 분류 {quadrant}. "
    "가격, 원가, 프로모션 관점에서 실행 가능한 조언 2-3개를 주세요."
)


class AIAssistant:

    @staticmethod
    def _run(system_prompt, message, fallback, generator=None):
        generator = generator or get_text_generator()

        if not generator.is_configured():
            logger.warning(f"{generator.get_generator_name()} has no API key")
            return {'text': KEY_MISSING_MESSAGE, 'fallback': True}

        try:
            text = generator.generate(system_prompt, message)
        except TextGenerationError as e:
            logger.error(f"AI generation failed: {e.message}", exc_info=True)
            return {'text': fallback, 'fallback': True}

        return {'text': text, 'fallback': False}

    @staticmethod
    def _system_prompt(context):
        return ASSISTANT_PROMPT.format(
            context=json.dumps(context, ensure_ascii=False, indent=2, default=str))

    @staticmethod
    def ask(message, context, generator=None):
        """Free-form question about the store's numbers"""
        result = AIAssistant._run(
            AIAssistant._system_prompt(context), message,
            CHAT_FALLBACK_MESSAGE, generator)
        result['role'] = 'ai'
        return result

    @staticmethod
    def daily_briefing(context, generator=None):
        return AIAssistant._run(
            AIAssistant._system_prompt(context), BRIEFING_REQUEST,
            BRIEFING_FALLBACK_MESSAGE, generator)

    @staticmethod
    def menu_advice(aggregate, generator=None):
        """Strategy advice for one classified menu item"""
        message = ADVICE_REQUEST.format(
            name=aggregate['name'],
            price=round(aggregate['avg_unit_price']),
            cost=round(aggregate['cost']),
            margin=round(aggregate['margin_percent'], 1),
            quantity=aggregate['quantity'],
            profit=round(aggregate['total_profit']),
            quadrant=aggregate['quadrant']
        )
        return AIAssistant._run(
            AIAssistant._system_prompt({'menu': aggregate}), message,
            ADVICE_FALLBACK_MESSAGE, generator)
