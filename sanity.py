from dotenv import load_dotenv
import os
import requests

load_dotenv()

feed_url = os.getenv("FEED_URL", "https://www.reddit.com/r/netsec+cybersecurity+ArtificialIntelligence/.rss?limit=25")
user_agent = os.getenv("USER_AGENT", "python:llmsec-newsbot:0.1.0")
openai_key = os.getenv("OPENAI_KEY") or os.getenv("OPENAI_API_KEY", "")

print("FEED_URL:", feed_url)
print("OPENAI_KEY:", "set" if openai_key else "missing")

if not openai_key:
    raise SystemExit("Missing OPENAI_KEY in .env")
for name in ("REDDIT_CLIENT_ID", "REDDIT_CLIENT_SECRET", "REDDIT_USERNAME", "REDDIT_PASSWORD"):
    if not os.getenv(name):
        raise SystemExit(f"Missing {name} in .env")

r = requests.get(feed_url, headers={"User-Agent": user_agent}, timeout=10)
print("Feed OK:", r.status_code == 200, "| entries:", r.text.count("<entry>"))
