from __future__ import annotations

import json
from typing import Any

# One Lobsters page and one Hacker News item describing the same story.
# Lobsters 2020-12-27T06:58:40-06:00 is 12:58:40 UTC; HN 1609074256 is 13:04:16 UTC,
# so a correct timezone setup reports Lobsters first by 5 minutes, 36 seconds.
FORUM_SAMPLE_JSON = """\
[[{"short_id":"4pivy1","short_id_url":"https://lobste.rs/s/4pivy1",\
"created_at":"2020-12-27T06:58:40.000-06:00","title":"Bash HTTP monitoring dashboard",\
"url":"https://raymii.org/s/software/Bash_HTTP_Monitoring_Dashboard.html","score":30,\
"flags":0,"comment_count":2,"description":"",\
"comments_url":"https://lobste.rs/s/4pivy1/bash_http_monitoring_dashboard",\
"submitter_user":{"username":"raymii","created_at":"2013-11-20T11:58:43.000-06:00",\
"is_admin":false,"about":"https://raymii.org","is_moderator":false,"karma":7351,\
"avatar_url":"/avatars/raymii-100.png","invited_by_user":"journeysquid"},\
"tags":["linux","web"]}]]
"""

NEWS_SAMPLE_JSON = """\
[{"by":"todsacerdoti","descendants":26,"id":25550732,\
"kids":[25551346,25551828,25552963,25556255,25552339,25559309,25554106,25553520,25552809,25557037],\
"score":154,"time":1609074256,"title":"Bash HTTP Monitoring Dashboard","type":"story",\
"url":"https://raymii.org/s/software/Bash_HTTP_Monitoring_Dashboard.html"}]
"""

EXPECTED_ELAPSED_SECONDS = 5 * 60 + 36


def forum_sample() -> Any:
    return json.loads(FORUM_SAMPLE_JSON)


def news_sample() -> Any:
    return json.loads(NEWS_SAMPLE_JSON)
