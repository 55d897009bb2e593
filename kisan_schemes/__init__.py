"""
Kisan Scheme Matcher

Matches a farmer's questionnaire answers against a spreadsheet of government
scheme eligibility rules and returns the schemes the farmer qualifies for.
"""

__version__ = "1.0.0"
__author__ = "Kisan Marketplace Team"
__description__ = "Rule-table eligibility matching for agricultural government schemes"
