from mars_sim.app import main

main()
