"""Resource services of the KeywordsAI SDK.

Each service maps the operations of one API resource onto single calls of the
shared HTTP client:
- logs: request logs and conversation threads
- prompts: prompts and prompt versions
- models: models available through the API
- keys: temporary API keys
- integrations: text to speech, speech to text and embeddings
"""
