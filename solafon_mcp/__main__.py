from solafon_mcp.stdio import main

main()
