"""
HTML email templates
"""

WELCOME_EMAIL_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>Welcome to Signalist</title>
</head>
<body style="margin: 0; padding: 0; background-color: #050505; font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif;">
    <table role="presentation" width="100%" cellspacing="0" cellpadding="0" border="0" style="background-color: #050505;">
        <tr>
            <td align="center" style="padding: 40px 20px;">
                <table role="presentation" width="100%" cellspacing="0" cellpadding="0" border="0" style="max-width: 600px; background-color: #141414; border-radius: 8px; border: 1px solid #30333A;">
                    <tr>
                        <td style="padding: 40px;">
                            <h1 style="margin: 0 0 30px 0; font-size: 24px; font-weight: 600; color: #FDD458;">Welcome aboard {{name}}</h1>
                            {{intro}}
                            <p style="margin: 0 0 15px 0; font-size: 16px; line-height: 1.6; color: #CCDADC;">Here's what you can do right now:</p>
                            <ul style="margin: 0 0 30px 0; padding-left: 20px; color: #CCDADC; font-size: 16px; line-height: 1.6;">
                                <li>Set up your watchlist to follow your favorite stocks</li>
                                <li>Search any ticker and add it in one click</li>
                                <li>Get a daily email summarizing the news behind your watchlist</li>
                            </ul>
                            <p style="margin: 0; font-size: 14px; color: #9095A1;">Signalist</p>
                        </td>
                    </tr>
                </table>
            </td>
        </tr>
    </table>
</body>
</html>
"""

NEWS_SUMMARY_EMAIL_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>Market News Summary Today</title>
</head>
<body style="margin: 0; padding: 0; background-color: #050505; font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif;">
    <table role="presentation" width="100%" cellspacing="0" cellpadding="0" border="0" style="background-color: #050505;">
        <tr>
            <td align="center" style="padding: 40px 20px;">
                <table role="presentation" width="100%" cellspacing="0" cellpadding="0" border="0" style="max-width: 600px; background-color: #141414; border-radius: 8px; border: 1px solid #30333A;">
                    <tr>
                        <td style="padding: 40px;">
                            <h1 style="margin: 0 0 10px 0; font-size: 24px; font-weight: 600; color: #FDD458;">Market News Summary Today</h1>
                            <p style="margin: 0 0 30px 0; font-size: 14px; color: #6B7280;">{{date}}</p>
                            {{newsContent}}
                            <p style="margin: 30px 0 0 0; font-size: 12px; color: #6B7280;">You're receiving this because you subscribed to Signalist news updates. This is not investment advice.</p>
                        </td>
                    </tr>
                </table>
            </td>
        </tr>
    </table>
</body>
</html>
"""
