"""Telegram front end that renders flashcards and forwards user commands."""
import asyncio
import html
import logging
import random
from typing import List, Optional

from telegram import InlineKeyboardButton, InlineKeyboardMarkup, Update
from telegram.error import BadRequest, TelegramError
from telegram.ext import CallbackContext

from vocadeck import monitoring
from vocadeck.config import settings
from vocadeck.errors import SpeechError
from vocadeck.models.card import CardView, GenderPair, LanguageRow
from vocadeck.models.word import GENDER_MODES, TYPE_FILTERS, GenderMode, WordCatalog, WordType
from vocadeck.services.navigation import NavigationController
from vocadeck.services.speech_service import SpeechService

# Get logger for this module
logger = logging.getLogger(__name__)

# Keys in context.bot_data
CATALOG = "catalog"
LOAD_ERROR = "load_error"
SPEECH = "speech"

# Keys in context.chat_data
CONTROLLER = "controller"
FLIPPED = "flipped"
LAST_AUDIO_MESSAGE_ID = "last_audio_message_id"

# Button texts
PREV = "◀️ Prev"
NEXT = "Next ▶️"
FLIP = "🔄 Flip"
SHUFFLE = "🔀 Shuffle"

FILTER_LABELS = {
    "all": "All",
    "noun": "Nouns",
    "adj": "Adjectives",
    "verb": "Verbs",
    "phrase": "Phrases",
}

GENDER_LABELS = {
    GenderMode.BOTH: "M + F",
    GenderMode.MASCULINE: "M",
    GenderMode.FEMININE: "F",
}

FLAGS = {
    "fr": "🇫🇷",
    "es": "🇪🇸",
    "it": "🇮🇹",
    "lat": "🏛",
}

MSG_EMPTY_DECK = "No cards match this filter."
MSG_USE_START = "Please use /start to open the flashcards."
MSG_SPEECH_DISABLED = "Speech is disabled"
MSG_SPEECH_FAILED = "Sorry, I couldn't read this aloud. Please try again later."
MSG_CARD_CHANGED = "This card is no longer shown. Use the buttons on the latest card."

PROGRESS_BAR_WIDTH = 10


def active(text: str, is_active: bool) -> str:
    return f"• {text} •" if is_active else text


async def log_received(update: Update, context_type: str) -> None:
    """Log message."""
    txt = ""
    if update.callback_query:
        txt = f" {update.callback_query.data}"
    elif update.message:
        txt = f" {update.message.text}"
    user = update.effective_user
    username = user.username if user else None
    user_id = user.id if user else None
    logger.info(f"Received @{context_type:8} from user {username} ({user_id}){txt}")


def new_controller(context: CallbackContext) -> NavigationController:
    """Start a fresh session for the chat."""
    catalog = context.bot_data.get(CATALOG) or WordCatalog()
    seed = settings.deck.shuffle_seed
    controller = NavigationController(
        catalog,
        rng=random.Random(seed),
        type_filter=settings.deck.default_type_filter,
        gender_mode=settings.deck.default_gender_mode,
    )
    if CONTROLLER not in context.chat_data:
        monitoring.active_sessions.inc()
    context.chat_data[CONTROLLER] = controller
    context.chat_data[FLIPPED] = False
    return controller


def get_controller(context: CallbackContext) -> NavigationController:
    """Get the chat's session, creating it on first use."""
    controller = context.chat_data.get(CONTROLLER)
    if controller is None:
        controller = new_controller(context)
    return controller


def progress_bar(fraction: float) -> str:
    filled = round(fraction * PROGRESS_BAR_WIDTH)
    return "▓" * filled + "░" * (PROGRESS_BAR_WIDTH - filled)


def format_row(row: LanguageRow) -> str:
    """One translation line of the card back."""
    flag = FLAGS.get(row.code, "")
    label = html.escape(row.label)
    if isinstance(row.display, GenderPair):
        text = (f"<b>M</b> {html.escape(row.display.masculine)}"
                f" / <b>F</b> {html.escape(row.display.feminine)}")
    else:
        text = html.escape(row.display)
    return f"{flag} <b>{label}</b>: {text}"


def format_footer(view: CardView) -> str:
    return (f"<i>Card {view.position} / {view.deck_size}"
            f" · Deck seen {view.deck_seen_count} / {view.deck_size}"
            f" · Seen {view.seen_count} / {view.catalog_size}</i>\n"
            f"{progress_bar(view.progress)}")


def format_card(view: CardView, flipped: bool) -> str:
    """Render a card as an HTML message."""
    content = view.content
    if content is None:
        return (f"{MSG_EMPTY_DECK}\n\n"
                f"<i>Filter: {FILTER_LABELS.get(view.type_filter, view.type_filter)}"
                f" · Seen {view.seen_count} / {view.catalog_size}</i>")

    lines = [f"🏷 <code>{html.escape(content.word_type)}</code>", ""]
    if flipped:
        lines.append(f"<i>{html.escape(content.english)}</i>")
        lines.append("")
        lines.extend(format_row(row) for row in content.rows)
    else:
        lines.append(f"<b>{html.escape(content.headline)}</b>")
    lines.append("")
    lines.append(format_footer(view))
    return "\n".join(lines)


def build_keyboard(view: CardView, flipped: bool) -> InlineKeyboardMarkup:
    """Inline keyboard with navigation, speech, gender and filter buttons."""
    keyboard: List[List[InlineKeyboardButton]] = []
    content = view.content

    if content is not None:
        keyboard.append([
            InlineKeyboardButton(PREV, callback_data="prev"),
            InlineKeyboardButton(FLIP, callback_data="flip"),
            InlineKeyboardButton(NEXT, callback_data="next"),
        ])

        if flipped:
            speak_buttons = []
            number = 0
            for row in content.rows:
                for i, speakable in enumerate(row.speakables):
                    suffix = ""
                    if len(row.speakables) > 1:
                        suffix = " M" if i == 0 else " F"
                    speak_buttons.append(InlineKeyboardButton(
                        f"🔊 {FLAGS.get(row.code, row.label)}{suffix}",
                        callback_data=f"speak_{view.catalog_index}_{number}",
                    ))
                    number += 1
            # Three buttons per line
            for i in range(0, len(speak_buttons), 3):
                keyboard.append(speak_buttons[i:i + 3])

        if content.word_type == WordType.ADJ.value:
            keyboard.append([
                InlineKeyboardButton(
                    active(GENDER_LABELS[mode], mode is view.gender_mode),
                    callback_data=f"gender_{mode.value}",
                )
                for mode in GenderMode
            ])

    keyboard.append([
        InlineKeyboardButton(
            active(FILTER_LABELS[type_filter], type_filter == view.type_filter),
            callback_data=f"filter_{type_filter}",
        )
        for type_filter in TYPE_FILTERS
    ])
    keyboard.append([InlineKeyboardButton(SHUFFLE, callback_data="shuffle")])
    return InlineKeyboardMarkup(keyboard)


async def send_card(update: Update, context: CallbackContext, view: CardView) -> None:
    """Show the card, editing the current message when answering a button."""
    flipped = context.chat_data.get(FLIPPED, False)
    text = format_card(view, flipped)
    reply_markup = build_keyboard(view, flipped)

    if view.content is not None:
        monitoring.cards_shown.labels(view.content.word_type).inc()

    if update.callback_query:
        try:
            await update.callback_query.edit_message_text(
                text,
                reply_markup=reply_markup,
                parse_mode="HTML",
            )
        except BadRequest as e:
            # Telegram rejects edits that leave the message unchanged
            logger.warning(f"Error editing card message: {e}")
    else:
        await update.message.reply_text(
            text,
            reply_markup=reply_markup,
            parse_mode="HTML",
        )


async def send_load_error(update: Update, context: CallbackContext) -> bool:
    """Tell the user the word list is unavailable. Returns True if it is."""
    error = context.bot_data.get(LOAD_ERROR)
    if not error:
        return False
    text = f"⚠️ {error}"
    if update.callback_query:
        await update.callback_query.edit_message_text(text)
    else:
        await update.message.reply_text(text)
    return True


async def handle_start(update: Update, context: CallbackContext) -> None:
    """Start a new session and show the first card."""
    await log_received(update, "start")
    if await send_load_error(update, context):
        return

    controller = new_controller(context)
    monitoring.commands.labels("start").inc()
    await send_card(update, context, controller.current_view())


async def run_command(update: Update, context: CallbackContext, command: str, argument: Optional[str] = None) -> None:
    """Apply a session command and show the result."""
    controller = get_controller(context)
    monitoring.commands.labels(command).inc()

    if command == "next":
        view = controller.next()
        context.chat_data[FLIPPED] = False
    elif command == "prev":
        view = controller.prev()
        context.chat_data[FLIPPED] = False
    elif command == "shuffle":
        view = controller.reshuffle()
        context.chat_data[FLIPPED] = False
    elif command == "filter":
        view = controller.set_filter(argument)
        context.chat_data[FLIPPED] = False
    elif command == "gender":
        view = controller.set_gender_mode(argument)
    elif command == "flip":
        context.chat_data[FLIPPED] = not context.chat_data.get(FLIPPED, False)
        view = controller.current_view()
    else:
        raise ValueError(f"Unknown command: {command}")

    await send_card(update, context, view)


async def handle_callback(update: Update, context: CallbackContext) -> None:
    """Handle callback queries from the card keyboard."""
    query = update.callback_query
    await log_received(update, "callback")

    if await send_load_error(update, context):
        await query.answer()
        return

    data = query.data or ""
    if data.startswith("speak_"):
        card, _, number = data[len("speak_"):].partition("_")
        await handle_speak(update, context, int(card), int(number))
        return

    await query.answer()
    command, _, argument = data.partition("_")
    await run_command(update, context, command, argument or None)


async def handle_speak(update: Update, context: CallbackContext, card: int, number: int) -> None:
    """Read one translation of card ``card`` aloud, if it is still the current one."""
    query = update.callback_query
    if not settings.speech.enabled:
        await query.answer(text=MSG_SPEECH_DISABLED, show_alert=True)
        return

    controller = get_controller(context)
    if controller.state.current_index != card:
        logger.warning(f"Speak button for card {card} pressed while showing {controller.state.current_index}")
        await query.answer(text=MSG_CARD_CHANGED, show_alert=True)
        return

    try:
        speakable = controller.speakable(number)
    except IndexError:
        # Same card, but pressed on a keyboard from another gender mode
        logger.warning(f"Stale speak button {number}")
        await query.answer()
        return

    await query.answer()
    monitoring.speech_requests.labels(speakable.lang).inc()
    speech: SpeechService = context.bot_data.get(SPEECH) or SpeechService()

    # Only one utterance per chat: drop the previous one first
    await delete_last_audio(update, context)

    try:
        path = await asyncio.to_thread(speech.synthesize, speakable.text, speakable.lang)
    except SpeechError as e:
        logger.error(f"Error synthesizing speech: {e}")
        monitoring.error_count.labels("speech").inc()
        await query.message.reply_text(MSG_SPEECH_FAILED)
        return

    await send_audio_file(update, context, str(path), speakable.text)


async def delete_last_audio(update: Update, context: CallbackContext) -> None:
    """Delete the previous audio message of the chat, if any."""
    message_id = context.chat_data.pop(LAST_AUDIO_MESSAGE_ID, None)
    if message_id is None:
        return
    try:
        await update.effective_chat.delete_message(message_id)
    except TelegramError as e:
        logger.warning(f"Error deleting audio message: {e}")


async def send_audio_file(update: Update, context: CallbackContext, audio_file_path: str, title: str) -> None:
    """Send an audio file and remember its message ID for later deletion."""
    try:
        with open(audio_file_path, "rb") as audio:
            message = await update.callback_query.message.reply_audio(audio, title=title)
        context.chat_data[LAST_AUDIO_MESSAGE_ID] = message.message_id
    except (OSError, TelegramError) as e:
        logger.error(f"Error sending audio file: {e}")
        monitoring.error_count.labels("audio").inc()
        await update.callback_query.message.reply_text(MSG_SPEECH_FAILED)


async def handle_next(update: Update, context: CallbackContext) -> None:
    await log_received(update, "next")
    if not await send_load_error(update, context):
        await run_command(update, context, "next")


async def handle_prev(update: Update, context: CallbackContext) -> None:
    await log_received(update, "prev")
    if not await send_load_error(update, context):
        await run_command(update, context, "prev")


async def handle_shuffle(update: Update, context: CallbackContext) -> None:
    await log_received(update, "shuffle")
    if not await send_load_error(update, context):
        await run_command(update, context, "shuffle")


async def handle_filter(update: Update, context: CallbackContext) -> None:
    """/filter <type>"""
    await log_received(update, "filter")
    if await send_load_error(update, context):
        return
    args = context.args or []
    if len(args) != 1 or args[0].lower() not in TYPE_FILTERS:
        await update.message.reply_text(f"Usage: /filter {'|'.join(TYPE_FILTERS)}")
        return
    await run_command(update, context, "filter", args[0].lower())


async def handle_gender(update: Update, context: CallbackContext) -> None:
    """/gender <mode>"""
    await log_received(update, "gender")
    if await send_load_error(update, context):
        return
    args = context.args or []
    if len(args) != 1 or args[0].lower() not in GENDER_MODES:
        await update.message.reply_text(f"Usage: /gender {'|'.join(GENDER_MODES)}")
        return
    await run_command(update, context, "gender", args[0].lower())


async def handle_message(update: Update, context: CallbackContext) -> None:
    """Handle plain text messages."""
    await log_received(update, "message")
    await update.message.reply_text(MSG_USE_START)


async def handle_error(update: object, context: CallbackContext) -> None:
    """Log errors raised by handlers."""
    error = context.error
    monitoring.error_count.labels(type(error).__name__).inc()
    logger.error(f"Error while handling update {update}: {error}", exc_info=error)
