from net_liquidity_monitor.service.monitor import main


main()
