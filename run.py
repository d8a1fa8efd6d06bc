#!/usr/bin/env python
"""
Development runner

Usage:
    python run.py

Prints the registered routes and starts the HeliMarket app on port 5001.
"""

from helimarket import create_app

if __name__ == '__main__':
    app = create_app()

    # Print registered routes for debugging
    print("\n=== Registered Routes ===")
    for rule in app.url_map.iter_rules():
        print(f"{rule.rule:40s} -> {rule.endpoint}")
    print("=" * 70)

    app.run(host='127.0.0.1', port=5001, debug=True)
