"""
Download - Fetch a log file and a download link
"""
import asyncio
from pathlib import Path
from pterapy import PanelClient, setup_logging


async def main():
    setup_logging()
    
    async with PanelClient("https://panel.example.com", "ptlc_your_api_key") as panel:
        server = await panel.get_server("1a2b3c4d")
        manager = await server.get_file_manager()
        
        logs = await manager.get_folder_contents("/logs")
        for file in logs:
            if file.name == "latest.log":
                # One-time link, usable from a browser
                print(f"Link: {await file.get_download_url()}")
                
                # Or stream it to disk
                Path("downloads").mkdir(exist_ok=True)
                path = await file.save("downloads")
                print(f"Saved: {path}")


if __name__ == "__main__":
    asyncio.run(main())
