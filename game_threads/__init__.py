"""
Discord game-week threads bot.
"""
