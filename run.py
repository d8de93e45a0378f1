#!/usr/bin/env python3
"""
Loan Amortizer Entry Point

Starts the FastAPI server with the amortization schedule API.
"""

import sys

from loan_amortizer.api import run_server
from loan_amortizer.config import get_config


if __name__ == "__main__":
    settings = get_config()
    print("📈 Starting Loan Amortizer...")
    print("💰 All financial calculations use Decimal precision")
    print(f"🌐 API available at: http://localhost:{settings.api_port}")
    print(f"📚 Documentation at: http://localhost:{settings.api_port}/docs")
    print()

    try:
        run_server()
    except KeyboardInterrupt:
        print("\n👋 Shutting down Loan Amortizer...")
    except Exception as e:
        print(f"❌ Error starting server: {e}")
        sys.exit(1)
