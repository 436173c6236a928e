"""
Prompt templates for AI-generated email content
"""

PERSONALIZED_WELCOME_EMAIL_PROMPT = """Generate highly personalized HTML content that will be inserted into an email template at the {{intro}} placeholder.

User profile data:
{{userProfile}}

PERSONALIZATION REQUIREMENTS:
You MUST create content that is obviously tailored to THIS specific user by:
- Directly referencing their investment goals, risk tolerance and preferred industry
- Matching the tone to their experience level
- Mentioning how the watchlist and daily news summaries fit their goals

CRITICAL FORMATTING REQUIREMENTS:
- Return ONLY clean HTML content with NO markdown, NO code blocks, NO backticks
- Use a SINGLE paragraph only: <p class="mobile-text" style="margin: 0 0 30px 0; font-size: 16px; line-height: 1.6; color: #CCDADC;">content</p>
- Write exactly TWO sentences (add one more sentence only if needed, but never exceed THREE sentences)
- Keep total content between 35-50 words
- Use <strong> for key personalized elements (their goals, sectors, etc.)
- DO NOT start with "Welcome" since the email header already says welcome
"""

NEWS_SUMMARY_EMAIL_PROMPT = """Generate HTML content for a market news summary email that will be inserted into the NEWS_SUMMARY_EMAIL_TEMPLATE at the {{newsContent}} placeholder.

News data to summarize:
{{newsItems}}

REQUIREMENTS:
- Return ONLY clean HTML content with NO markdown, NO code blocks, NO backticks
- Group the articles into sections: Market Highlights, Top Movers, Earnings & Company News (skip empty sections)
- For every article write a short plain-English summary (2-3 sentences), a bottom line for investors,
  and a "Read Full Story" link to the article url
- Use <h3> for section titles and <h4> for article titles
- Keep the tone clear, factual and beginner friendly
- If the news list is empty, return a single paragraph saying there is no notable market news today
"""

DEFAULT_WELCOME_INTRO = (
    "Thanks for joining Signalist. You now have the tools to track markets "
    "and make smarter moves!"
)

NO_NEWS_SUMMARY = "No Market News Available Today."
