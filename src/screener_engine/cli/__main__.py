from screener_engine.cli import app

app()
