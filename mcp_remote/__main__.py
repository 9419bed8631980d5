from mcp_remote.cli import run

if __name__ == "__main__":
    run()
