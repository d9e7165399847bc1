"""Main application entry point."""
import asyncio
import logging
import signal
from typing import Optional

from telegram.ext import (
    Application,
    CallbackQueryHandler,
    CommandHandler,
    MessageHandler,
    filters,
)

from vocadeck import monitoring
from vocadeck.config import settings
from vocadeck.errors import LoadError
from vocadeck.models.word import WordCatalog
from vocadeck.services.catalog_service import load_catalog
from vocadeck.services.speech_service import SpeechService
from vocadeck.bot import (
    CATALOG,
    LOAD_ERROR,
    SPEECH,
    handle_callback,
    handle_error,
    handle_filter,
    handle_gender,
    handle_message,
    handle_next,
    handle_prev,
    handle_shuffle,
    handle_start,
)


class VocadeckBot:
    """Main application class."""

    def __init__(self):
        """Initialize the application."""
        self.application: Optional[Application] = None
        self.catalog: Optional[WordCatalog] = None
        self.load_error: Optional[str] = None
        self.running = False
        self.logger = logging.getLogger(__name__)

    def load_words(self) -> None:
        """Load the word list once; a failure is kept and shown to users."""
        try:
            self.catalog = load_catalog(settings.paths.words_file)
            self.load_error = None
        except LoadError as e:
            self.logger.error("Word list unavailable: %s", str(e))
            monitoring.error_count.labels("load").inc()
            self.catalog = WordCatalog()
            self.load_error = str(e)

    def register_handlers(self, application: Application) -> None:
        """Attach command, callback and error handlers."""
        application.add_handler(CommandHandler("start", handle_start))
        application.add_handler(CommandHandler("next", handle_next))
        application.add_handler(CommandHandler("prev", handle_prev))
        application.add_handler(CommandHandler("shuffle", handle_shuffle))
        application.add_handler(CommandHandler("filter", handle_filter))
        application.add_handler(CommandHandler("gender", handle_gender))
        application.add_handler(CallbackQueryHandler(handle_callback))
        application.add_handler(MessageHandler(filters.TEXT & ~filters.COMMAND, handle_message))
        application.add_error_handler(handle_error)

    async def start(self) -> None:
        """Start the application."""
        if self.running:
            return

        try:
            settings.bot.validate()

            # Words must be in place before the first update is processed
            self.load_words()

            # Create application
            self.application = Application.builder().token(settings.bot.token).build()
            self.application.bot_data[CATALOG] = self.catalog
            self.application.bot_data[LOAD_ERROR] = self.load_error
            self.application.bot_data[SPEECH] = SpeechService()
            self.logger.info("Application created")

            self.register_handlers(self.application)
            self.logger.info("Handlers added")

            if settings.monitoring.metrics_port:
                monitoring.start_monitoring(settings.monitoring.metrics_port)
                self.logger.info("Metrics exporter listening on port %d", settings.monitoring.metrics_port)

            # Start application
            await self.application.initialize()
            await self.application.start()
            await self.application.updater.start_polling()
            self.logger.info("Application started")

            self.running = True

        except Exception as e:
            self.logger.error("Failed to start application: %s", str(e))
            await self.stop()
            raise

    async def stop(self) -> None:
        """Stop the application."""
        if not self.application:
            self.running = False
            return

        try:
            if self.running:
                await self.application.updater.stop()
                await self.application.stop()
            await self.application.shutdown()
            self.logger.info("Application stopped")
        except Exception as e:
            self.logger.error("Error while stopping application: %s", str(e))
            raise
        finally:
            self.application = None
            self.running = False

    def run(self) -> None:
        """Run the application."""
        # Create event loop
        loop = asyncio.new_event_loop()
        asyncio.set_event_loop(loop)

        # Handle signals
        def signal_handler(signum, frame):
            """Handle signals like SIGINT (Ctrl+C)."""
            print()  # Print a newline to ensure log messages start on a new line
            self.logger.info(f"Received signal {signum}. Shutting down...")
            loop.stop()

        signal.signal(signal.SIGINT, signal_handler)
        signal.signal(signal.SIGTERM, signal_handler)

        try:
            # Start bot
            loop.run_until_complete(self.start())

            # Run event loop
            loop.run_forever()

        except KeyboardInterrupt:
            self.logger.info("Received keyboard interrupt")
        finally:
            # Stop bot
            loop.run_until_complete(self.stop())
            loop.close()


def main() -> None:
    """Main entry point."""
    bot = VocadeckBot()
    bot.run()


if __name__ == "__main__":
    main()
