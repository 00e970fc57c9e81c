"""Convention Checker MCPサーバーのコマンドラインエントリポイント。"""

if __name__ == "__main__":
    import uvicorn
    from starlette.middleware import Middleware

    from convention_checker.config import CheckerConfig
    from convention_checker.log import configure_logging
    from convention_checker.middleware import TokenAuthMiddleware
    from convention_checker.server import create_server

    config = CheckerConfig()
    configure_logging(config.log_level)
    mcp = create_server(config)
    app = mcp.http_app(
        transport="streamable-http",
        middleware=[Middleware(TokenAuthMiddleware, url_token=config.url_token)],
    )
    uvicorn.run(app, host=config.host, port=config.port)
