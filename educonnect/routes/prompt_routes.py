from fastapi import APIRouter, HTTPException, status
from pydantic import BaseModel

from educonnect.services import gemini

router = APIRouter(tags=['prompt'])


class PromptRequest(BaseModel):
    prompt: str | None = None


class PromptResponse(BaseModel):
    text: str


@router.post('/geminiBot', response_model=PromptResponse)
def forward_prompt(data: PromptRequest):
    prompt = (data.prompt or '').strip()
    if not prompt:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail='Prompt is required')

    try:
        text = gemini.generate_text(prompt)
    except gemini.PromptProviderError as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail='Failed to generate text',
        ) from exc

    return PromptResponse(text=text)
