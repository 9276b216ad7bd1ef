"""
Agent implementations for ReviewScout.

Contains the modules that scrape and analyze competitor reviews:
- Field Extractors and Review Item Parser
- Consent Dismisser
- Review Scraper (orchestrator)
- Competitor Analyzer
- Analysis Exporter
"""
