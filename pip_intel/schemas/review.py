from pydantic import BaseModel


class ReviewAnalysisRequest(BaseModel):
    review_text: str
    use_ai: bool = False
