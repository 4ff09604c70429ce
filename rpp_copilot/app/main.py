"""
RPP Copilot - Main Application Entry Point

Initializes the Gradio UI and launches the web interface.
"""
import logging

from dotenv import load_dotenv

# Must happen before importing any module that reads configuration
load_dotenv()

from rpp_copilot.config import settings as config
from rpp_copilot.config.gcp_settings import is_gcp_environment, mask_secret
from rpp_copilot.ui.gradio_app import create_gradio_ui


def main():
    """
    Main entry point for the RPP Copilot application.

    Initializes the Gradio interface and launches the web server.
    """
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if is_gcp_environment():
        print("✓ Running on GCP - using Secret Manager for the default API key")
    else:
        print("✓ Running locally - using environment variables for the default API key")
    print(f"✓ Default Gemini key: {mask_secret(config.GOOGLE_API_KEY)}")

    demo = create_gradio_ui()
    print("\n🚀 Launching RPP Copilot...")
    print(f"📍 Server will be available at http://{config.GRADIO_SERVER_NAME}:{config.GRADIO_SERVER_PORT}")

    # Pass theme and css to launch() for Gradio 6.0+
    demo.launch(
        server_name=config.GRADIO_SERVER_NAME,
        server_port=config.GRADIO_SERVER_PORT,
        theme=demo.theme,
        css=demo.css
    )


if __name__ == "__main__":
    main()
