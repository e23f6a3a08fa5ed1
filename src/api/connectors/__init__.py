"""Edge adapters for inbound channels.

- elevenlabs/: tool-call webhooks from the ElevenLabs voice agent
"""

__all__: list[str] = []
