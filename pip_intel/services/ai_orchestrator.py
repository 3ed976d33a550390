import json
import re
import requests
from typing import List, Dict, Any
from pip_intel.core.config import settings
from pip_intel.core.exceptions import AIError, AIKillSwitchError
import logging
from tenacity import retry, stop_after_attempt, wait_exponential, retry_if_exception_type

logger = logging.getLogger(__name__)

OPENROUTER_URL = "https://openrouter.ai/api/v1/chat/completions"

class AIOrchestrator:
    @staticmethod
    @retry(
        stop=stop_after_attempt(2),
        wait=wait_exponential(multiplier=1, min=1, max=4),
        retry=retry_if_exception_type((requests.exceptions.ConnectionError, requests.exceptions.Timeout)),
        reraise=True
    )
    def _post(payload: Dict[str, Any]) -> requests.Response:
        response = requests.post(
            url=OPENROUTER_URL,
            headers={
                "Authorization": f"Bearer {settings.ai.openrouter_api_key}",
                "Content-Type": "application/json",
            },
            data=json.dumps(payload),
            timeout=settings.ai.request_timeout_seconds
        )
        response.raise_for_status()
        return response

    @classmethod
    def _do_call(
        cls,
        messages: List[Dict[str, str]],
        model_name: str,
        temperature: float,
        json_output: bool = True
    ) -> str:
        logger.info(f"Calling AI Model: {model_name}")

        try:
            response = cls._post({
                "model": model_name,
                "messages": messages,
                "temperature": temperature
            })
            content = response.json()["choices"][0]["message"]["content"]
        except requests.exceptions.Timeout:
            logger.error("AI service timeout.")
            raise AIError("AI service reached timeout limit.")
        except requests.exceptions.HTTPError as e:
            logger.error(f"AI service HTTP error: {e}")
            raise AIError(f"AI service returned error: {e.response.status_code}")
        except requests.exceptions.RequestException as e:
            logger.error(f"AI service request failed: {e}")
            raise AIError(f"AI service error: {str(e)}")
        except (KeyError, IndexError, ValueError) as e:
            logger.error(f"AI service returned an unexpected payload: {e}")
            raise AIError("AI service returned an unexpected payload.")

        if json_output:
            # Models sometimes wrap JSON in prose or code fences
            json_match = re.search(r'\{.*\}', content, re.DOTALL)
            if json_match:
                return json_match.group()

        return content

    @classmethod
    def call_model(
        cls,
        messages: List[Dict[str, str]],
        temperature: float = None,
        json_output: bool = True
    ) -> str:
        """
        Centralized AI model caller with kill-switch, retries and a fallback model.
        """
        if settings.ai.kill_switch:
            logger.warning("AI Kill-switch is active. Blocking request.")
            raise AIKillSwitchError()

        if not settings.ai.openrouter_api_key:
            logger.error("OpenRouter API Key missing.")
            raise AIError("AI service configuration error.")

        temperature = settings.ai.temperature if temperature is None else temperature
        try:
            return cls._do_call(messages, settings.ai.model_name, temperature, json_output)
        except AIError as e:
            logger.warning(f"Primary model {settings.ai.model_name} failed: {e.message}. Attempting fallback.")
            try:
                return cls._do_call(messages, settings.ai_fallback_model, temperature, json_output)
            except AIError as fe:
                logger.error(f"Fallback model {settings.ai_fallback_model} also failed: {fe.message}")
                raise AIError(
                    "AI service completely unavailable",
                    details={"primary": e.message, "fallback": fe.message}
                )

    @classmethod
    def analyze_text(
        cls,
        system_prompt: str,
        user_content: str,
        temperature: float = None
    ) -> Dict[str, Any]:
        """ Helper for analysis tasks that expect a JSON object back. """
        messages = [
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": user_content}
        ]
        response_text = cls.call_model(messages, temperature=temperature, json_output=True)
        try:
            result = json.loads(response_text)
        except json.JSONDecodeError:
            logger.error(f"Failed to decode AI JSON response: {response_text[:200]}")
            raise AIError("Failed to parse AI response.")
        if not isinstance(result, dict):
            raise AIError("AI response was not a JSON object.")
        return result
