"""
Static prompt templates.

Each prompt is a fixed, parameterless walkthrough that strings several tools
together into a working bot. Lookups are by exact name.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List


class PromptNotFoundError(LookupError):
    pass


ECHO_BOT_TEXT = """Create a Solafon echo bot that replies to every user message with the same text.

Steps:
1. Use get_bot_info to verify the bot token is working
2. Use set_webhook to set your webhook URL
3. Use set_welcome_message to greet new users
4. Here's the webhook handler code (Node.js/Express):

```javascript
const express = require('express');
const app = express();
app.use(express.json());

const BOT_TOKEN = process.env.SOLAFON_BOT_TOKEN;
const API_URL = 'https://api.solafon.com';

app.post('/webhook', async (req, res) => {
  const { event, message } = req.body;

  if (event === 'message' && message.content.type === 'text') {
    await fetch(`${API_URL}/api/bot/messages`, {
      method: 'POST',
      headers: {
        'Content-Type': 'application/json',
        'X-Bot-Token': BOT_TOKEN,
      },
      body: JSON.stringify({
        conversationId: message.conversationId,
        content: {
          type: 'text',
          text: `Echo: ${message.content.text}`,
        },
      }),
    });
  }

  res.json({ ok: true });
});

app.listen(3000);
```"""

WALLET_CHECKER_BOT_TEXT = """Create a Solafon bot that checks Solana wallet balances.

When a user sends a Solana address, the bot should:
1. Call get_wallet_balance with the address
2. Format the response showing SOL balance and top tokens
3. Send the formatted response back

Use these tools:
- get_bot_info — verify connection
- set_webhook — configure webhook URL
- get_wallet_balance — check balances
- send_message — reply to users

The webhook handler should detect Solana addresses (base58, 32-44 chars) in user messages."""

INTERACTIVE_MENU_BOT_TEXT = """Create a Solafon bot with interactive menus using buttons and callbacks.

Features:
- Welcome message with action buttons
- Button callbacks that trigger different responses
- Card carousel for listing items

Use send_message with buttons:
```json
{
  "conversationId": "...",
  "content": {
    "type": "text",
    "text": "What would you like to do?",
    "buttons": [
      {"id": "prices", "text": "Token Prices", "action": "callback", "payload": "show_prices"},
      {"id": "help", "text": "Help", "action": "callback", "payload": "show_help"},
      {"id": "web", "text": "Open dApp", "action": "url", "url": "https://app.solafon.com"}
    ]
  }
}
```

Handle callbacks in webhook:
```javascript
if (event === 'callback') {
  const { payload, conversationId } = req.body;
  switch (payload) {
    case 'show_prices': /* fetch and send prices */ break;
    case 'show_help': /* send help text */ break;
  }
}
```"""


@dataclass(frozen=True, slots=True)
class PromptDefinition:
    name: str
    description: str
    text: str

    def render(self) -> List[Dict[str, Any]]:
        return [{"role": "user", "content": {"type": "text", "text": self.text}}]


PROMPT_REGISTRY: Dict[str, PromptDefinition] = {
    prompt.name: prompt
    for prompt in (
        PromptDefinition(
            name="create_echo_bot",
            description="Step-by-step guide to create a simple echo bot on Solafon",
            text=ECHO_BOT_TEXT,
        ),
        PromptDefinition(
            name="create_wallet_checker_bot",
            description="Create a bot that checks Solana wallet balances when users send an address",
            text=WALLET_CHECKER_BOT_TEXT,
        ),
        PromptDefinition(
            name="create_interactive_menu_bot",
            description="Create a bot with interactive button menus and callbacks",
            text=INTERACTIVE_MENU_BOT_TEXT,
        ),
    )
}


def list_prompts() -> List[Dict[str, Any]]:
    return [
        {"name": prompt.name, "description": prompt.description, "arguments": []}
        for prompt in PROMPT_REGISTRY.values()
    ]


def get_prompt(name: str) -> Dict[str, Any]:
    """Return the ``prompts/get`` result for ``name``."""
    prompt = PROMPT_REGISTRY.get(name)
    if prompt is None:
        raise PromptNotFoundError(f"Unknown prompt: {name}")
    return {"description": prompt.description, "messages": prompt.render()}
