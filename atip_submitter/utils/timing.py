"""Timing utilities"""

import asyncio
import random

import atip_submitter.config as config


async def human_delay(min_ms=300, max_ms=800):
    """Random human-like delay"""
    delay = random.uniform(min_ms, max_ms) / 1000
    await asyncio.sleep(delay)


async def pace(kind="page"):
    """Randomized delay from the active timing profile ("page" or "item")"""
    await human_delay(
        config.TIMING[f"{kind}_delay_min"],
        config.TIMING[f"{kind}_delay_max"],
    )


def format_elapsed_time(seconds):
    """Format elapsed time in human-readable format"""
    if seconds < 60:
        return f"{seconds:.1f}s"
    elif seconds < 3600:
        mins = int(seconds // 60)
        secs = int(seconds % 60)
        return f"{mins}m {secs}s"
    else:
        hours = int(seconds // 3600)
        mins = int((seconds % 3600) // 60)
        return f"{hours}h {mins}m"
