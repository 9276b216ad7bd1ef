"""
Utility modules for ReviewScout.

Cross-cutting concerns:
- Renderer: browser session / element handle interfaces (Playwright)
- Storage: review persistence
- Text cleaning: UI-noise stripping, patterns, tokenization
- Sentiment: lexicon sentiment scorer
"""
