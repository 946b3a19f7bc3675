import logging

import httpx

logger = logging.getLogger("boggle")


def format_summary(summary: dict) -> tuple[str, str]:
    """Build the (title, body) of a round notification."""
    title = f"Boggle {summary['size']}x{summary['size']} - {summary['total_score']} points"
    lines = [
        f"Found {summary['found_count']} of {summary['total_possible']} words",
        f"Best possible score: {summary['max_score']}",
    ]
    if summary.get("words"):
        lines.append("")
        lines.append(",".join(summary["words"]))
    return title, "\n".join(lines)


async def send_round_summary(summary: dict, topic: str, ntfy_url: str = "https://ntfy.sh"):
    """Post a finished round to ntfy.sh. Best-effort: failures are logged, not raised."""
    try:
        title, body = format_summary(summary)
        async with httpx.AsyncClient(timeout=10.0) as client:
            resp = await client.post(
                f"{ntfy_url}/{topic}",
                content=body.encode("utf-8"),
                headers={
                    "Title": title,
                    "Tags": "game_die",
                },
            )
            resp.raise_for_status()
            logger.info("Notification sent to %s/%s (status %d)", ntfy_url, topic, resp.status_code)

    except Exception as e:
        logger.error("Failed to send notification: %s", e)
