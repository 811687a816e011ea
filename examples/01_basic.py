"""
Basic usage - Login and list a server's files
"""
import asyncio
from pterapy import PanelClient


async def main():
    async with PanelClient("https://panel.example.com", "ptlc_your_api_key") as panel:
        print(f"Logged in as {panel.account.username}")
        
        # Servers this key can reach
        print("\nServers:")
        for server in await panel.get_servers():
            print(f"  {server.identifier}  {server.name}")
        
        # Root directory of one server
        server = await panel.get_server("1a2b3c4d")
        manager = await server.get_file_manager()
        
        print("\nFiles in root:")
        for file in manager:
            kind = "DIR " if file.is_directory else "FILE"
            print(f"  {kind} {file.location} ({file.size} bytes)")
        
        # Walk into a directory
        plugins = manager.get_child("plugins")
        if plugins:
            for child in await plugins.get_children():
                print(f"    {child.location}")


if __name__ == "__main__":
    asyncio.run(main())
