from dotenv import load_dotenv

# Load environment variables from .env file (if present)
load_dotenv()

from rpp_copilot.app.main import main

if __name__ == "__main__":
    main()
