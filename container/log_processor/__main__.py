from log_processor.handler import main

main()
