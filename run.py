#!/usr/bin/env python3
"""
Application startup script with environment configuration support.
"""

import sys
import argparse

from skatespot.config.loader import ConfigLoader, load_config_for_environment


def main():
    """Main startup function with environment configuration"""
    parser = argparse.ArgumentParser(description="SkateSpot Backend Server")
    parser.add_argument(
        "--env",
        choices=["development", "staging", "production", "testing"],
        default=None,
        help="Environment to run (default: from ENVIRONMENT env var or development)"
    )
    parser.add_argument(
        "--host",
        default=None,
        help="Host to bind to (overrides config)"
    )
    parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="Port to bind to (overrides config)"
    )
    parser.add_argument(
        "--reload",
        action="store_true",
        help="Enable auto-reload (overrides config)"
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug mode (overrides config)"
    )
    parser.add_argument(
        "--list-envs",
        action="store_true",
        help="List available environment configurations"
    )
    parser.add_argument(
        "--create-sample",
        help="Create a sample .env file for the specified environment"
    )

    args = parser.parse_args()

    if args.list_envs:
        envs = ConfigLoader.get_available_environments()
        print("Available environment configurations:")
        for env in envs:
            print(f"  - {env}")
        return

    if args.create_sample:
        try:
            sample_file = ConfigLoader.create_sample_env_file(args.create_sample)
            print(f"✓ Sample configuration created: {sample_file}")
        except (ValueError, OSError) as e:
            print(f"✗ Failed to create sample configuration: {e}")
            sys.exit(1)
        return

    try:
        settings = load_config_for_environment(args.env)
        print(f"✓ Loaded configuration for environment: {settings.environment.value}")
    except ValueError as e:
        print(f"✗ Failed to load configuration: {e}")
        sys.exit(1)

    if args.host:
        settings.host = args.host
    if args.port:
        settings.port = args.port
    if args.reload:
        settings.reload = True
    if args.debug:
        settings.debug = True

    print(f"🛹 Starting {settings.app_name} v{settings.app_version}")
    print(f"   Environment: {settings.environment.value}")
    print(f"   Host: {settings.host}")
    print(f"   Port: {settings.port}")
    print(f"   Storage: {settings.storage.backend.value} ({settings.storage.name})")
    print(f"   Log Level: {settings.log_level.value}")

    import uvicorn

    if settings.reload:
        # Reload mode re-imports the module, which reads settings from the environment
        uvicorn.run(
            "skatespot.main:app",
            host=settings.host,
            port=settings.port,
            reload=True,
            log_level=settings.log_level.value.lower(),
        )
        return

    from skatespot.main import create_app

    uvicorn.run(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.value.lower(),
        access_log=True,
    )


if __name__ == "__main__":
    main()
